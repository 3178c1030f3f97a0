from cobalt.defaults import DEFAULT_PROTECTIVE_EQUIPMENT
from cobalt.models import MsdsProtectiveEquipment, ProtectiveEquipment
from cobalt.routes.catalog import catalog_router

router = catalog_router(
    prefix="/protective-equipment",
    model=ProtectiveEquipment,
    link_model=MsdsProtectiveEquipment,
    link_column="protective_equipment_id",
    defaults=DEFAULT_PROTECTIVE_EQUIPMENT,
    default_category="respiratory",
    label="protective equipment",
)
