from directupload.schemas.upload import PresignRequest, PresignResponse, PresignServerResponse

__all__ = ["PresignRequest", "PresignResponse", "PresignServerResponse"]
