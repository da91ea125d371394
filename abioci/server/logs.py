import copy

from uvicorn.config import LOGGING_CONFIG


def logging_config(level: str = "INFO") -> dict:
    """uvicorn's logging config, with the abioci loggers on uvicorn's default handler"""
    config = copy.deepcopy(LOGGING_CONFIG)
    config["loggers"]["abioci"] = {
        "handlers": ["default"],
        "level": level,
        "propagate": False,
    }
    return config
