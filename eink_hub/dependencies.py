"""
FastAPI dependencies.

Shared objects (config, repository, rotation cursors, identifier source) are
created once by the app factory and kept on ``app.state``; these functions
hand them to the routers and can be swapped via ``app.dependency_overrides``.
"""

from fastapi import Depends, Request

from eink_hub.config import ServerConfig
from eink_hub.device_service import DeviceService
from eink_hub.identifiers import IdentifierSource
from eink_hub.repositories import DeviceRepository
from eink_hub.rotation import RotationCursorTable


def get_config(request: Request) -> ServerConfig:
    return request.app.state.config


def get_device_repository(request: Request) -> DeviceRepository:
    return request.app.state.device_repository


def get_rotation(request: Request) -> RotationCursorTable:
    return request.app.state.rotation


def get_identifier_source(request: Request) -> IdentifierSource:
    return request.app.state.identifiers


def get_request_id(request: Request) -> str:
    """Request id assigned by the request logging middleware."""
    return getattr(request.state, "request_id", "")


def get_device_service(
    config: ServerConfig = Depends(get_config),
    repository: DeviceRepository = Depends(get_device_repository),
    rotation: RotationCursorTable = Depends(get_rotation),
    identifiers: IdentifierSource = Depends(get_identifier_source),
) -> DeviceService:
    return DeviceService(
        repository=repository,
        rotation=rotation,
        identifiers=identifiers,
        default_image_url=config.setup_logo_url,
    )
