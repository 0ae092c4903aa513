import pytest

from lightgrad.core import config as config_mod
from lightgrad.core import grad_mode


@pytest.fixture(autouse=True)
def restore_global_state():
    prev_flag = grad_mode.is_grad_enabled()
    prev_config = config_mod.get_config()
    yield
    grad_mode.set_grad_enabled(prev_flag)
    config_mod.set_config(prev_config)
