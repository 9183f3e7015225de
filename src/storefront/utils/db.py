from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _engine_for(provider):
    return create_engine(provider.conn_info["database_uri"])


def setup_db(domain: Domain):
    """Create tables for every aggregate, entity and projection on a SQL provider"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] not in _SQL_PROVIDERS:
                continue

            records = (
                list(domain.registry.aggregates.values())
                + list(domain.registry.entities.values())
                + list(domain.registry.projections.values())
            )
            for record in records:
                if record.cls.meta_.provider == provider.name:
                    # Touching the DAO registers the table on the provider metadata
                    domain.repository_for(record.cls)._dao  # noqa: B018

            provider._metadata.create_all(_engine_for(provider))


def drop_db(domain: Domain):
    """Drop all tables on SQL providers"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                provider._metadata.drop_all(_engine_for(provider))
