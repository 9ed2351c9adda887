"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Проверку finite значений
2. Валидацию положительных / неотрицательных параметров
3. Сравнение float с толерантностью
"""

import math

import pytest

from pionext.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    is_close,
    is_valid_float,
    validate_finite,
    validate_non_negative,
    validate_positive,
)


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1e300)
        assert is_valid_float(1e-300)

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_values(self, value: float) -> None:
        assert not is_valid_float(value)


class TestIsClose:
    """Тесты для is_close"""

    def test_relative_tolerance(self) -> None:
        """Относительная разница ниже 1e-9 считается равенством"""
        assert is_close(3.0333333333, 3.0333333333 * (1 + EPS_FLOAT_COMPARE_REL / 2))
        assert not is_close(3.03, 3.04)

    def test_absolute_tolerance_near_zero(self) -> None:
        """Около нуля работает абсолютная толерантность"""
        assert is_close(0.0, EPS_FLOAT_COMPARE_ABS / 2)
        assert not is_close(0.0, 1e-6)


class TestValidation:
    """Тесты валидаторов"""

    def test_validate_finite(self) -> None:
        validate_finite(1.5, "x")

        with pytest.raises(ValueError, match="x must be a valid float"):
            validate_finite(math.nan, "x")

    def test_validate_positive(self) -> None:
        validate_positive(1e-9, "quantity")

        with pytest.raises(ValueError, match="quantity must be positive"):
            validate_positive(0.0, "quantity")
        with pytest.raises(ValueError, match="quantity must be positive"):
            validate_positive(-5.0, "quantity")
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_positive(math.inf, "quantity")

    def test_validate_non_negative(self) -> None:
        validate_non_negative(0.0, "balance")

        with pytest.raises(ValueError, match="balance must be non-negative"):
            validate_non_negative(-0.1, "balance")
        with pytest.raises(ValueError, match="not NaN/Inf"):
            validate_non_negative(math.nan, "balance")


class TestPackageExports:
    """Тесты для публичного API pionext.core.math"""

    def test_all_names_resolve(self) -> None:
        import pionext.core.math as core_math

        for name in core_math.__all__:
            assert hasattr(core_math, name), name
        assert len(set(core_math.__all__)) == len(core_math.__all__)

    def test_safeguards_reexported(self) -> None:
        import pionext.core.math as core_math

        assert core_math.validate_finite is validate_finite
        assert core_math.EPS_FLOAT_COMPARE_ABS == EPS_FLOAT_COMPARE_ABS
