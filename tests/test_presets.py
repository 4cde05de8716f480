"""Tests for preset configurations."""

import pytest

from wordgram import get_preset, list_presets, print_presets
from wordgram.presets import MODEL_PARAMETERS, PRESETS, model_parameters


class TestPresetFunctions:
    """Test preset utility functions."""

    def test_list_presets(self):
        """Test list_presets returns all presets."""
        assert list_presets() == ["compatible", "exact", "refined"]

    def test_get_preset_valid(self):
        """Test get_preset with valid preset name."""
        config = get_preset("compatible")

        assert config["exact_keys"] is False
        assert config["refine"] is False
        assert "description" in config

    def test_get_preset_returns_copy(self):
        """Changing a returned preset leaves the registry alone."""
        config = get_preset("exact")
        config["exact_keys"] = False

        assert PRESETS["exact"]["exact_keys"] is True

    def test_get_preset_invalid(self):
        """Test get_preset with invalid preset name."""
        with pytest.raises(ValueError, match="Unknown preset: 'nonexistent'. Available: compatible, exact, refined"):
            get_preset("nonexistent")

    def test_model_parameters(self):
        """Only constructor arguments are returned."""
        params = model_parameters("refined")

        assert set(params) == set(MODEL_PARAMETERS)
        assert params == {"exact_keys": True, "refine": True, "report_every": 1000}

    def test_model_parameters_invalid(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            model_parameters("fastest")

    def test_all_presets_have_required_keys(self):
        """Every preset carries the model parameters and its documentation."""
        for name in list_presets():
            config = get_preset(name)
            for key in MODEL_PARAMETERS + ("description", "use_case"):
                assert key in config, f"{name} missing {key}"

    def test_print_presets(self, capsys):
        """Test print_presets output."""
        print_presets()
        out = capsys.readouterr().out

        assert "Description" in out
        for name in list_presets():
            assert name in out
            assert PRESETS[name]["description"] in out
