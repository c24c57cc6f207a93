"""Reference catalogs for categorical listing fields.

Names are in the marketplace's working language (Spanish) and map to the
stable identifiers of the hosted reference tables. Adding an entry means
shipping a new version of this module.
"""
from typing import NamedTuple, Optional, Tuple


class CatalogEntry(NamedTuple):
    id: str
    name: str


MATERIALS: Tuple[CatalogEntry, ...] = (
    CatalogEntry("b93fcec6-b173-47d4-be39-52d272bc8a87", "Agroquímicos"),
    CatalogEntry("97ca010a-6375-40d6-880e-051ba3818516", "Alimentos y bebidas"),
    CatalogEntry("220193b8-bafe-476d-a225-433b567db256", "Fertilizante"),
    CatalogEntry("b181d3b8-f92c-44fd-9334-c34041ef29df", "Ganado"),
    CatalogEntry("bdb09420-ef80-4de0-a038-03285d48fb92", "Girasol"),
    CatalogEntry("6def5e3b-358d-46e5-9170-8e42a2c97d23", "Maiz"),
    CatalogEntry("4e9efe3d-8eb6-4600-96dd-eb35cbad8699", "Maquinarias"),
    CatalogEntry("49ebf50f-d37a-446c-927c-f463fda953e0", "Materiales construcción"),
    CatalogEntry("8cd407f6-297e-4730-a1d6-15a2ac485809", "Otras cargas generales"),
    CatalogEntry("c921caf8-5e2b-4fdb-9190-d7fe624771bf", "Otros cultivos"),
    CatalogEntry("176bf83f-3109-431d-8a35-1d157ae4d91f", "Refrigerados"),
    CatalogEntry("4edee3cb-7308-4d1b-96e7-a378052004e7", "Soja"),
    CatalogEntry("04ba66a5-6a87-4243-b8ed-45baf6cfc2e8", "Trigo"),
)

PRESENTATIONS: Tuple[CatalogEntry, ...] = (
    CatalogEntry("ca7cf082-837c-4c14-b2ad-c85f0821d86c", "Big Bag"),
    CatalogEntry("e676ca36-8a96-4338-9a41-2692c18664f5", "Bolsa"),
    CatalogEntry("3923f3da-eb7d-4438-8fcd-74d53891c392", "Granel"),
    CatalogEntry("510db5c8-eb5f-4ef1-b23a-96d4e4869f2d", "Otros"),
    CatalogEntry("234a739b-6666-4595-a8df-51e840c09599", "Pallet"),
)

PAYMENT_METHODS: Tuple[CatalogEntry, ...] = (
    CatalogEntry("48c0c41f-ed88-4b3a-b06d-9a1f03131fe8", "Cheque"),
    CatalogEntry("692684a5-9103-4257-a3e3-6486f907177a", "E-check"),
    CatalogEntry("c96c6cd8-8742-4a8c-9df6-18554a7c87af", "Efectivo"),
    CatalogEntry("e0f74bf6-2886-44da-9469-c68ffaf53e4f", "Otros"),
    CatalogEntry("7b998228-2121-465b-9721-679a320e50ae", "Transferencia"),
)

EQUIPMENT_TYPES: Tuple[CatalogEntry, ...] = (
    CatalogEntry("85bf5951-50a7-4abc-af6e-ea3b9550d97d", "Batea"),
    CatalogEntry("8fa614ad-af82-4909-b0ff-b1d288ea97a3", "Camioneta"),
    CatalogEntry("1933f25d-eb8e-43cf-b2e8-5224ab6a4ef2", "CamionJaula"),
    CatalogEntry("779ba2a1-f4e3-4121-be59-3e1cdd2c6da8", "Carreton"),
    CatalogEntry("a16bdd90-df15-4adf-8cc4-7a74ad375ffd", "Chasis y Acoplado"),
    CatalogEntry("9eb2b303-5c92-45ae-8120-4cc40dd3fa49", "Furgon"),
    CatalogEntry("e1c0cc7d-27fb-4206-9fe3-280ffc40d742", "Otros"),
    CatalogEntry("be085c4d-f6a5-4f36-b869-9ec606bef794", "Semi"),
    CatalogEntry("5939b8d1-71d7-4e37-851b-db388856945e", "Tolva"),
)

# used when a listing names no payment method
DEFAULT_PAYMENT_METHOD = PAYMENT_METHODS[2]


def lookup_by_name(catalog: Tuple[CatalogEntry, ...], name: Optional[str]) -> Optional[CatalogEntry]:
    """Return the entry whose name equals `name` ignoring case, or None."""
    if not name or not isinstance(name, str):
        return None
    wanted = name.lower()
    for entry in catalog:
        if entry.name.lower() == wanted:
            return entry
    return None
