from __future__ import annotations

from src.forecasting import EncodingError, ProductCatalog, build_catalog
from src.ingestion import SalesObservation


def _obs(product: str) -> SalesObservation:
    return SalesObservation(period="2024-01", product=product, quantity=1.0)


def test_build_catalog_assigns_codes_in_first_seen_order() -> None:
    observations = [_obs("Widget"), _obs("Gadget"), _obs("Widget"), _obs("Gizmo")]

    catalog = build_catalog(observations)

    assert catalog.as_dict() == {"Widget": 0, "Gadget": 1, "Gizmo": 2}
    assert sorted(catalog.codes) == list(range(len(catalog)))
    assert catalog.products == ["Widget", "Gadget", "Gizmo"]


def test_catalog_reuses_existing_codes() -> None:
    catalog = ProductCatalog(["Widget"])

    assert catalog.add("Widget") == 0
    assert catalog.add("Gadget") == 1
    assert catalog.add("Widget") == 0
    assert len(catalog) == 2


def test_catalog_reverse_lookup() -> None:
    catalog = build_catalog([_obs("Widget"), _obs("Gadget")])

    assert catalog.product_for(1) == "Gadget"
    assert catalog.code_for("Widget") == 0
    assert "Gadget" in catalog
    assert "Gizmo" not in catalog


def test_catalog_raises_encoding_error_for_unknown_entries() -> None:
    catalog = build_catalog([_obs("Widget")])

    for lookup in (lambda: catalog.code_for("Gizmo"), lambda: catalog.product_for(3)):
        try:
            lookup()
        except EncodingError:
            pass
        else:
            raise AssertionError("Expected EncodingError for an unknown catalog entry.")


def test_build_catalog_is_rebuilt_per_call() -> None:
    first = build_catalog([_obs("Widget"), _obs("Gadget")])
    second = build_catalog([_obs("Gadget")])

    assert first.as_dict() == {"Widget": 0, "Gadget": 1}
    assert second.as_dict() == {"Gadget": 0}
