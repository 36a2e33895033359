from extdata.ingestion.ports.http import HttpResponse, IHttpClient

__all__ = ["HttpResponse", "IHttpClient"]
