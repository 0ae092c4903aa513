from lightgrad import TensorConfig, get_config, set_config


def test_defaults():
    cfg = TensorConfig()
    assert cfg.default_grad_enabled is True
    assert cfg.accumulate_grad is False


def test_from_env():
    cfg = TensorConfig.from_env({"LIGHTGRAD_GRAD_ENABLED": "0", "LIGHTGRAD_ACCUMULATE_GRAD": "Yes"})
    assert cfg.default_grad_enabled is False
    assert cfg.accumulate_grad is True


def test_from_env_ignores_empty_values():
    cfg = TensorConfig.from_env({"LIGHTGRAD_GRAD_ENABLED": "  "})
    assert cfg == TensorConfig()


def test_set_config_returns_previous():
    original = get_config()
    new = TensorConfig(accumulate_grad=True)
    assert set_config(new) is original
    assert get_config() is new
