"""
CurveState — Снапшот состояния кривой кредита

Immutable Pydantic модель, представляющая состояние кривой на момент вызова.
Владелец состояния — внешнее хранилище (запись кредита проекта); ядро только
читает снапшот и возвращает новый, никогда не изменяя переданный.
"""

from pydantic import BaseModel, Field, field_validator

from pionext.core.math.bonding_curve import current_raise, price, total_raise


class CurveState(BaseModel):
    """
    Состояние кривой: выпущенный и максимальный supply.

    Инвариант: 0 <= current_supply <= max_supply.

    Immutable модель (frozen=True).
    """

    current_supply: float = Field(
        ..., ge=0, allow_inf_nan=False, description="Выпущенный supply (кредиты)"
    )
    max_supply: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Максимальный supply кривой"
    )

    model_config = {"frozen": True}

    @field_validator("max_supply")
    @classmethod
    def validate_supply_within_max(cls, v: float, info) -> float:
        """Проверка, что current_supply не превышает max_supply"""
        if "current_supply" in info.data:
            current = info.data["current_supply"]
            if current > v:
                raise ValueError(f"current_supply {current} must be <= max_supply {v}")
        return v

    def current_price(self) -> float:
        """Маржинальная цена при текущем supply."""
        return price(self.current_supply, self.max_supply)

    def remaining_supply(self) -> float:
        """Сколько кредитов ещё можно выпустить."""
        return self.max_supply - self.current_supply

    def current_raise(self) -> float:
        return current_raise(self.current_supply, self.max_supply)

    def total_raise(self) -> float:
        return total_raise(self.max_supply)

    def is_sold_out(self) -> bool:
        """
        Проверка, выпущен ли весь supply.

        Returns:
            True если current_supply == max_supply
        """
        return self.current_supply >= self.max_supply

    def with_supply(self, new_supply: float) -> "CurveState":
        """
        Новый снапшот с другим current_supply (исходный не меняется).

        Raises:
            ValidationError: Если new_supply вне [0, max_supply]
        """
        return CurveState(current_supply=new_supply, max_supply=self.max_supply)
