"""
JSON Schema Contract Validators

Модуль для валидации JSON данных, приходящих от внешних обработчиков
(trade API), согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (pionext/core/contracts/schema/):
- trade_request.json — запрос сделки по кредиту
- curve_state.json — снапшот supply записи кредита
"""

import json
from pathlib import Path
from typing import Any, ClassVar, Dict, Final, List

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from pydantic import TypeAdapter

from pionext.core.domain.curve_state import CurveState
from pionext.core.domain.trade import TradeIntent


# =============================================================================
# SCHEMA LOADER
# =============================================================================

_DEFAULT_SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


class SchemaLoader:
    """Загрузка и кэширование JSON Schema из каталога schema/ пакета."""

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        JSON Schema по имени файла без расширения ('trade_request').

        Схема проходит meta-validation при первой загрузке, дальше
        отдаётся из кэша.

        Raises:
            FileNotFoundError: Если файла схемы нет
            ValueError: Если схема не проходит meta-validation
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(
                f"Invalid JSON Schema in {schema_path.name}: {e.message}"
            ) from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Проверка данных против одной схемы контракта.

    Подкласс задаёт schema_name; схема берётся из общего загрузчика,
    если другой не передан явно.
    """

    schema_name: ClassVar[str]

    def __init__(self, loader: SchemaLoader | None = None):
        schema = (loader or _SCHEMA_LOADER).load_schema(self.schema_name)
        self.validator = Draft202012Validator(schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: На первом найденном нарушении
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def errors(self, data: Dict[str, Any]) -> List[ValidationError]:
        """Все нарушения схемы, упорядоченные по JSON path поля."""
        return sorted(self.validator.iter_errors(data), key=lambda e: e.json_path)


class TradeRequestValidator(ContractValidator):
    """Тело запроса сделки: user_id, credit_id, type, amount."""

    schema_name = "trade_request"


class CurveStateValidator(ContractValidator):
    """Снапшот supply из записи кредита."""

    schema_name = "curve_state"




# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

_TRADE_INTENT_ADAPTER: TypeAdapter = TypeAdapter(TradeIntent)

# Поле количества/суммы в зависимости от типа сделки
_AMOUNT_FIELD: Dict[str, str] = {
    "buy": "quantity",
    "sell": "quantity",
    "buy_spend": "currency_amount",
    "sell_for_proceeds": "currency_amount",
}


def validate_trade_request(data: Dict[str, Any]) -> None:
    """
    Валидация trade_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    TradeRequestValidator().validate(data)


def validate_curve_state(data: Dict[str, Any]) -> None:
    """
    Валидация curve_state данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    CurveStateValidator().validate(data)


def parse_trade_request(data: Dict[str, Any]) -> TradeIntent:
    """
    Валидация trade_request и построение соответствующего TradeIntent.

    Args:
        data: Тело запроса {user_id, credit_id, type, amount}

    Returns:
        Buy | Sell | BuySpend | SellForProceeds

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    validate_trade_request(data)

    kind = data["type"]
    return _TRADE_INTENT_ADAPTER.validate_python(
        {"kind": kind, _AMOUNT_FIELD[kind]: data["amount"]}
    )


def parse_curve_state(data: Dict[str, Any]) -> CurveState:
    """
    Валидация curve_state и построение CurveState.

    Дополнительные поля записи кредита (id, name, ...) игнорируются.

    Raises:
        ValidationError: Если данные не соответствуют схеме
        pydantic.ValidationError: Если current_supply > max_supply
    """
    validate_curve_state(data)
    return CurveState(
        current_supply=data["current_supply"],
        max_supply=data["max_supply"],
    )
