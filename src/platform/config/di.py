"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticketing.domain.ticket_code_generator import TicketCodeGenerator
from src.service.ticketing.driven_adapter.payment_gateway.mock_payment_gateway import (
    MockPaymentGateway,
)
from src.service.ticketing.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager, one engine per event loop)
    database = providers.Singleton(Database)

    # A fresh unit of work per use case; each `async with` opens its own session
    unit_of_work = providers.Factory(
        SqlAlchemyUnitOfWork, session_factory=database.provided.session
    )

    # Domain services
    ticket_code_generator = providers.Singleton(
        TicketCodeGenerator, length=config_service.provided.TICKET_CODE_LENGTH
    )

    # Outbound gateways
    payment_gateway = providers.Singleton(MockPaymentGateway)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
