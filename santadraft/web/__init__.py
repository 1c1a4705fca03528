from santadraft.web.api import LIMITER_KEY, SERVICE_KEY, create_app

__all__ = ["LIMITER_KEY", "SERVICE_KEY", "create_app"]
