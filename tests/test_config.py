from routeflow.config import Settings


def test_engine_defaults():
    config = Settings(_env_file=None)
    assert config.average_speed_meters_per_second == 13.4
    assert config.dwell_seconds == 180.0
    assert config.max_improvement_passes is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ROUTEFLOW_DWELL_SECONDS", "60")
    monkeypatch.setenv("ROUTEFLOW_MAX_IMPROVEMENT_PASSES", "5")

    config = Settings(_env_file=None)

    assert config.dwell_seconds == 60.0
    assert config.max_improvement_passes == 5


def test_allowed_origins_from_list():
    config = Settings(_env_file=None, frontend_allowed_origins=["https://a.example", "https://b.example"])
    assert config.frontend_allowed_origins == ("https://a.example", "https://b.example")
