from dependency_injector import containers, providers

from taxharvest.accounting.capital_gains import CapitalGainsEngine
from taxharvest.config import Settings
from taxharvest.db.session import build_engine, build_session_factory


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    capital_gains_engine = providers.Factory(
        CapitalGainsEngine,
        settings=settings,
    )
