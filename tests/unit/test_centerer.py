"""Unit tests for SizeFactorCenterer."""

import pytest
import numpy as np
import pandas as pd
import yaml

from sizefactor_centering import (
    BlockMode,
    CenteringConfig,
    SizeFactorConfig,
    SizeFactorCenterer,
    SanitizeConfig,
    SanitizeDiagnostics,
    HandlerAction,
    InvalidSizeFactorError,
)


class TestSizeFactorCenterer:
    """Tests for SizeFactorCenterer class."""

    def test_init_default_config(self):
        """Test centerer initialization."""
        centerer = SizeFactorCenterer()
        assert centerer.config.centering.block_mode is BlockMode.LOWEST

    def test_unblocked(self, size_factors):
        """Test unblocked centering through the centerer."""
        expected = float(np.mean(size_factors))
        result = SizeFactorCenterer().center(size_factors)
        assert not result.blocked
        assert result.mean == pytest.approx(expected)
        assert result.divisor == pytest.approx(expected)
        assert np.mean(size_factors) == pytest.approx(1.0)

    def test_unblocked_zero_mean(self):
        """Test that no divisor is reported for a zero mean."""
        values = np.array([0.0, np.nan])
        result = SizeFactorCenterer().center(values)
        assert result.mean == 0
        assert result.divisor is None
        assert result.diagnostics.n_invalid == 2

    def test_integer_blocks(self, example_blocked):
        """Test blocked centering with integer labels."""
        factors, blocks = example_blocked
        result = SizeFactorCenterer().center(factors, blocks=blocks)
        assert result.blocked
        assert result.block_levels == [0, 1]
        assert result.divisor == pytest.approx(4 / 3)
        np.testing.assert_allclose(result.group_means, [4 / 3, 22 / 3])

    def test_string_blocks(self):
        """Test that string labels are factorized."""
        factors = np.array([10.0, 10.0, 1.0, 1.0, 2.0, 2.0])
        labels = ["b", "b", "a", "a", "a", "b"]
        result = SizeFactorCenterer().center(factors, blocks=labels)
        assert result.block_levels == ["a", "b"]
        np.testing.assert_allclose(result.group_means, [4 / 3, 22 / 3])
        assert result.divisor == pytest.approx(4 / 3)

    def test_categorical_blocks_with_unused(self):
        """Test that unused categories are empty blocks."""
        factors = np.array([1.0, 3.0, 4.0])
        labels = pd.Categorical(["s1", "s1", "s3"], categories=["s1", "s2", "s3"])
        config = SizeFactorConfig(centering=CenteringConfig(block_mode=BlockMode.PER_BLOCK))
        result = SizeFactorCenterer(config).center(factors, blocks=labels)
        np.testing.assert_allclose(result.group_means, [2.0, 0.0, 4.0])
        np.testing.assert_allclose(factors, [0.5, 1.5, 1.0])
        assert result.divisor is None

    def test_shared_diagnostics(self):
        """Test that a caller-supplied accumulator is filled."""
        diag = SanitizeDiagnostics(n_nan=1)
        result = SizeFactorCenterer().center(np.array([1.0, np.nan, 0.0]), diagnostics=diag)
        assert result.diagnostics is not diag
        assert result.diagnostics.n_nan == 1
        assert result.diagnostics.n_zero == 1
        assert diag.n_nan == 2
        assert diag.n_zero == 1

    def test_stale_counts_do_not_trigger_sanitize(self):
        """Test that earlier counts in a shared accumulator are not acted on."""
        diag = SanitizeDiagnostics()
        SizeFactorCenterer().center(np.array([1.0, np.nan]), diagnostics=diag)
        assert diag.n_nan == 1

        config = SizeFactorConfig(sanitize=SanitizeConfig(enabled=True))
        values = np.array([1.0, 2.0, 3.0])
        result = SizeFactorCenterer(config).center(values, diagnostics=diag)
        assert result.n_sanitized == 0
        assert result.diagnostics.n_invalid == 0
        assert diag.n_nan == 1
        np.testing.assert_allclose(values, [0.5, 1.0, 1.5])

    def test_sanitize_after_centering(self):
        """Test that invalid values are replaced after centering."""
        config = SizeFactorConfig(
            sanitize=SanitizeConfig(
                enabled=True,
                handle_zero=HandlerAction.SANITIZE,
                handle_nan=HandlerAction.SANITIZE,
            )
        )
        values = np.array([2.0, 6.0, 0.0, np.nan])
        result = SizeFactorCenterer(config).center(values)
        assert result.mean == pytest.approx(4.0)
        assert result.n_sanitized == 2
        np.testing.assert_allclose(values, [0.5, 1.5, 0.5, 1.0])

    def test_sanitize_without_ignore(self):
        """Test that invalid values are found even when not ignored."""
        config = SizeFactorConfig(
            centering=CenteringConfig(ignore_invalid=False),
            sanitize=SanitizeConfig(enabled=True, handle_zero="sanitize"),
        )
        values = np.array([1.0, 3.0, 0.0, 4.0])
        result = SizeFactorCenterer(config).center(values)
        assert result.mean == pytest.approx(2.0)
        assert result.n_sanitized == 1
        np.testing.assert_allclose(values, [0.5, 1.5, 0.5, 2.0])

    def test_sanitize_error(self):
        """Test that the default sanitize action raises."""
        config = SizeFactorConfig(sanitize=SanitizeConfig(enabled=True))
        with pytest.raises(InvalidSizeFactorError):
            SizeFactorCenterer(config).center(np.array([1.0, np.inf]))

    def test_log_path(self, tmp_path, example_blocked):
        """Test that a YAML summary is written."""
        factors, blocks = example_blocked
        log_path = tmp_path / "logs" / "centering.yaml"
        SizeFactorCenterer().center(factors, blocks=blocks, log_path=log_path)

        docs = [d for d in yaml.safe_load_all(log_path.read_text()) if d is not None]
        assert len(docs) == 1
        record = docs[0]
        assert record["blocked"] is True
        assert record["block_mode"] == "lowest"
        assert record["group_means"]["0"] == pytest.approx(4 / 3)
        assert record["diagnostics"]["n_nan"] == 0

    def test_to_dict_unblocked(self, size_factors):
        """Test dictionary conversion for unblocked results."""
        result = SizeFactorCenterer().center(size_factors)
        data = result.to_dict()
        assert data["blocked"] is False
        assert "group_means" not in data
        assert data["n_sanitized"] == 0
