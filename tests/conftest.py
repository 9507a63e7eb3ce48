import pytest

from deckcode.models import failure as failure_module
from deckcode.models.card import CatalogCard


@pytest.fixture(autouse=True)
def clear_finalized_responses():
    """Clear the finalized responses set between tests.

    This prevents test isolation issues where Python reuses memory
    addresses for new objects, causing id() collisions with previously
    finalized responses.
    """
    failure_module._finalized_responses.clear()
    yield
    failure_module._finalized_responses.clear()


@pytest.fixture
def catalog() -> list[CatalogCard]:
    """Small card catalog covering both expansion tables and all types."""
    return [
        CatalogCard(id="exA-1", name="Opening Act", kind="Artist", types=("赤",)),
        CatalogCard(id="AA-1", name="Street Singer", kind="Artist", types=("青",)),
        CatalogCard(id="AS-12", name="First Chorus", kind="Song", types=("黄",)),
        CatalogCard(id="BM-7", name="Spotlight", kind="Magic", types=("即時",)),
        CatalogCard(id="JS-12", name="Encore", kind="Song", types=("白",)),
        CatalogCard(id="prmD-9", name="Promo Stage", kind="Direction", types=("設置",)),
        CatalogCard(id="RD-50", name="Final Curtain", kind="Direction", types=("全",)),
    ]


@pytest.fixture
def sample_catalog_csv() -> str:
    """Sample catalog CSV export."""
    return """id,name,kind,type,effect,tags
exA-1,Opening Act,Artist,赤/青,Draw a card.,starter/draw
JS-12,Encore,Song,白,,encore|live、encore
prmD-9,Promo Stage,Direction,設置,Place on the field.,
bad-id,Broken Row,Magic,全,,
AM-3,,Magic,即時,,"""
