"""
Tests for SettingsService

Covers:
- Resolution order: store value, shared value, configuration default
- Per-store overrides on save
- Password kept when omitted
"""
import logging
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.apps.payment_settings.domain.value_objects import SettingKey
from src.apps.payment_settings.models import Setting
from src.apps.payment_settings.schemas import ProviderSettingsIn
from src.apps.payment_settings.services.settings_service import SettingsService
from src.apps.payment_settings.uow.unit_of_work import UnitOfWork
from src.core.config import Settings
from src.core.models import Base

DEFAULTS = Settings(
    uniteller_shop_idp="env-shop",
    uniteller_login="env-login",
    uniteller_password="env-password",
)


@pytest_asyncio.fixture
async def session(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def service(session):
    return SettingsService(uow=UnitOfWork(session), defaults=DEFAULTS)


def payload(**overrides) -> ProviderSettingsIn:
    data = {
        "shop_idp": "00004321",
        "login": "5678",
        "password": "global-secret",
        "additional_fee": "10",
        "additional_fee_percentage": False,
    }
    data.update(overrides)
    return ProviderSettingsIn(**data)


@pytest.mark.asyncio
async def test_defaults_from_configuration(service):
    loaded = await service.load()

    assert loaded.shop_idp == "env-shop"
    assert loaded.login == "env-login"
    assert loaded.password == "env-password"
    assert loaded.additional_fee == Decimal("0")


@pytest.mark.asyncio
async def test_save_and_load_shared_values(service):
    out = await service.save(payload())

    assert out.store_id == 0
    assert out.has_password is True
    assert out.overrides is None

    loaded = await service.load()
    assert loaded.shop_idp == "00004321"
    assert loaded.password == "global-secret"
    assert loaded.additional_fee == Decimal("10")
    assert loaded.additional_fee_percentage is False


@pytest.mark.asyncio
async def test_store_override(service):
    await service.save(payload())
    await service.save(
        payload(shop_idp="store-shop", shop_idp_override_for_store=True),
        store_id=3,
    )

    store = await service.load(3)
    shared = await service.load(0)

    assert store.shop_idp == "store-shop"
    assert store.login == "5678"
    assert shared.shop_idp == "00004321"

    overrides = await service.get_overrides(3)
    assert overrides["shop_idp"] is True
    assert overrides["login"] is False


@pytest.mark.asyncio
async def test_clearing_override_falls_back_to_shared(service):
    await service.save(payload())
    await service.save(
        payload(login="store-login", login_override_for_store=True),
        store_id=3,
    )

    await service.save(payload(login="ignored"), store_id=3)

    assert (await service.load(3)).login == "5678"
    assert (await service.get_overrides(3))["login"] is False


@pytest.mark.asyncio
async def test_omitted_password_is_kept(service):
    await service.save(payload())
    out = await service.save(payload(password=None, login="new-login"))

    loaded = await service.load()
    assert loaded.password == "global-secret"
    assert loaded.login == "new-login"
    assert out.has_password is True


@pytest.mark.asyncio
async def test_stored_keys(service, session):
    await service.save(payload(additional_fee_percentage=True))

    rows = (await session.execute(Setting.__table__.select())).all()
    stored = {row.name: row.value for row in rows}

    assert stored[SettingKey("shop_idp").name] == "00004321"
    assert stored["unitellerpaymentsettings.additionalfeepercentage"] == "True"
    assert all(row.store_id == 0 for row in rows)


@pytest.mark.asyncio
async def test_store_password_removed_when_override_cleared(service):
    await service.save(payload())
    await service.save(
        payload(password="store-secret", password_override_for_store=True),
        store_id=3,
    )
    assert (await service.load(3)).password == "store-secret"

    await service.save(payload(password=None), store_id=3)

    assert (await service.get_overrides(3))["password"] is False
    assert (await service.load(3)).password == "global-secret"


@pytest.mark.asyncio
async def test_store_password_kept_when_omitted_with_override(service):
    await service.save(payload())
    await service.save(
        payload(password="store-secret", password_override_for_store=True),
        store_id=3,
    )

    await service.save(
        payload(password=None, password_override_for_store=True),
        store_id=3,
    )

    assert (await service.load(3)).password == "store-secret"


@pytest.mark.asyncio
async def test_invalid_stored_fee_is_logged(service, session, caplog):
    session.add(
        Setting(name=SettingKey("additional_fee").name, value="ten", store_id=0)
    )
    await session.commit()

    with caplog.at_level(logging.WARNING):
        loaded = await service.load()

    assert loaded.additional_fee == Decimal("0")
    assert "unitellerpaymentsettings.additionalfee" in caplog.text
