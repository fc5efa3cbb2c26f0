"""
Tests for configuration management and dtype/device resolution.
"""

import pytest
import torch

from ga_kernel.core.types import resolve_dtype, resolve_device, validate_count
from ga_kernel.algebra import Multivector, PackedBlade
from ga_kernel.utils.config import (
    Config,
    get_config,
    set_config,
    load_config,
    save_config,
)


class TestConfig:
    """Config dataclass behaviour."""

    def test_defaults(self):
        """Defaults match the library constants."""
        config = Config()
        assert config.dtype == "float32"
        assert config.device == "cpu"
        assert config.max_dimension == 16
        assert config.extra == {}

    def test_from_dict_separates_extra(self):
        """Unknown keys go to `extra`."""
        config = Config.from_dict({"dtype": "int64", "note": "exact"})
        assert config.dtype == "int64"
        assert config.extra == {"note": "exact"}

    def test_update_returns_new_config(self):
        """update() leaves the original untouched."""
        config = Config()
        updated = config.update(max_dimension=8)
        assert updated.max_dimension == 8
        assert config.max_dimension == 16

    def test_save_load_round_trip(self, tmp_path):
        """Configs survive a JSON round trip."""
        config = Config(dtype="float64", max_dimension=10, extra={"tag": 1})
        path = tmp_path / "nested" / "config.json"
        save_config(config, str(path))
        loaded = load_config(str(path))
        assert loaded == config


class TestActiveConfig:
    """The process-wide active config supplies constructor defaults."""

    def test_set_config_returns_previous(self, restore_config):
        """set_config hands back the config it replaced."""
        new = Config(dtype="float64")
        previous = set_config(new)
        assert previous is restore_config
        assert get_config() is new

    def test_default_dtype_applies_to_packed(self, restore_config):
        """Packed blades also read the configured dtype."""
        set_config(Config(dtype="float64"))
        assert PackedBlade(1, 3).dtype == torch.float64

    def test_explicit_dtype_wins(self, restore_config):
        """An explicit dtype overrides the config."""
        set_config(Config(dtype="float64"))
        assert Multivector(2, dtype="int32").dtype == torch.int32


class TestResolution:
    """dtype/device resolution and count validation."""

    def test_resolve_dtype(self):
        """Names and dtypes resolve to torch.dtype."""
        assert resolve_dtype("int64") is torch.int64
        assert resolve_dtype(torch.float16) is torch.float16
        assert resolve_dtype(None) is torch.float32

    @pytest.mark.parametrize("name", ["float7", "Tensor", "zeros"])
    def test_resolve_dtype_rejects_non_dtypes(self, name):
        """Only torch dtype attributes are accepted."""
        with pytest.raises(ValueError, match="Unknown dtype"):
            resolve_dtype(name)

    def test_resolve_device(self):
        """Device names resolve to torch.device."""
        assert resolve_device("cpu") == torch.device("cpu")
        assert resolve_device(None) == torch.device("cpu")

    def test_validate_count(self):
        """Counts are non-negative integers within the bound."""
        assert validate_count(3, "n") == 3
        assert validate_count(torch.tensor(2), "n") == 2
        with pytest.raises(ValueError, match="non-negative"):
            validate_count(-1, "n")
        with pytest.raises(ValueError, match="at most 4"):
            validate_count(5, "n", upper=4)
        with pytest.raises(ValueError, match="non-negative integer"):
            validate_count(2.0, "n")
