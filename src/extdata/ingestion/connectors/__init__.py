from extdata.ingestion.connectors.aiohttp_client import AiohttpClient

__all__ = ["AiohttpClient"]
