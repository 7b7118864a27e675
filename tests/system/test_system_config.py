import pytest

from field_attendance.core.exceptions import AuthorizationError, ValidationError
from field_attendance.system.model import SystemConfig


def test_defaults_when_never_saved(container):
    config = container.system_config_service.get_config()

    assert config == SystemConfig(grace_period_minutes=15, min_clock_interval_hours=6.0)
    assert config.as_dict() == {"gracePeriodMinutes": 15, "minClockIntervalHours": 6.0}


def test_full_control_updates_config(world, container):
    updated = container.system_config_service.update_config(
        actor=world.user("ceo1"), grace_period_minutes="10", min_clock_interval_hours=4.5
    )

    assert updated == SystemConfig(grace_period_minutes=10, min_clock_interval_hours=4.5)
    assert world.configs.config == updated


def test_partial_update_keeps_other_value(world, container):
    world.configs.config = SystemConfig(grace_period_minutes=20, min_clock_interval_hours=8)

    updated = container.system_config_service.update_config(actor=world.user("ceo1"), min_clock_interval_hours=0)

    assert updated.grace_period_minutes == 20
    assert updated.min_clock_interval_hours == 0


def test_zero_grace_is_stored(world, container):
    container.system_config_service.update_config(actor=world.user("ceo1"), grace_period_minutes=0)

    assert container.system_config_service.get_config().grace_period_minutes == 0


@pytest.mark.parametrize("role_user", ["gm1", "m1", "sup1", "s1"])
def test_only_full_control_may_update(world, container, role_user):
    with pytest.raises(AuthorizationError):
        container.system_config_service.update_config(actor=world.user(role_user), grace_period_minutes=5)
    assert world.configs.saves == 0


@pytest.mark.parametrize(
    "changes",
    [
        {"grace_period_minutes": -1},
        {"grace_period_minutes": 1441},
        {"grace_period_minutes": "abc"},
        {"min_clock_interval_hours": 24.5},
        {"min_clock_interval_hours": float("nan")},
    ],
)
def test_out_of_range_values_are_rejected(world, container, changes):
    with pytest.raises(ValidationError):
        container.system_config_service.update_config(actor=world.user("ceo1"), **changes)
    assert world.configs.saves == 0
