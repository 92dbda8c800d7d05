"""
Dependency Injection container for the sweagle_step component.

This container uses the `dependency-injector` library to wire together the
application service, the HTTP adapter and the host capabilities, based on the
Dynaconf settings.
"""

from dependency_injector import containers, providers
import httpx

from ..application.domain import *
from ..application.service import ConfigStepService
from ..settings import settings

from .api_client import HttpConfigService
from .host import LoggerSink, RaisingJobControl


class Container(containers.DeclarativeContainer):
    """DI container for wiring the application components."""

    config = providers.Object(settings)

    http_client = providers.Singleton(
        httpx.AsyncClient,
        timeout=config.provided.sweagle.timeout,
    )

    sink: providers.Singleton[ProgressSink] = providers.Singleton(LoggerSink)

    job: providers.Singleton[JobControl] = providers.Singleton(
        RaisingJobControl
    )

    config_service: providers.Factory[ConfigService] = providers.Factory(
        HttpConfigService,
        client=http_client,
    )

    step_service = providers.Factory(
        ConfigStepService,
        config_service=config_service,
        sink=sink,
        job=job,
        encoding=config.provided.upload.encoding,
    )
