from legalconsult.api.main import app

__all__ = ["app"]
