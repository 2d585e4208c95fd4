"""
Shared route dependencies
"""

from fastapi import Header, HTTPException

from ..config import AdaptiveConfig, get_adaptive_config


def get_current_user_id(x_user_id: str = Header(None)) -> str:
    """Caller identity; authentication happens upstream of this service"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_config() -> AdaptiveConfig:
    return get_adaptive_config()
