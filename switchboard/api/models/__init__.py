from switchboard.api.models.endpoint_requests import GenerateRequest, ModelsListRequest

__all__ = ["GenerateRequest", "ModelsListRequest"]
