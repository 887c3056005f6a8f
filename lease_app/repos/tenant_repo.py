from repos.backend_repo import BackendRepo
from schemas.schema import TenantOut


class TenantRepo(BackendRepo[TenantOut]):
    resource = "/tenants"
    schema = TenantOut
    int_fields = ("property_ids",)
