from repos.backend_repo import BackendRepo
from schemas.schema import PropertyOut


class PropertyRepo(BackendRepo[PropertyOut]):
    resource = "/properties"
    schema = PropertyOut
    int_fields = ("property_type_id", "location_id")
