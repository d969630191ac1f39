"""
Base schemas with standardized field types for consistent API responses.

Wire names are camelCase (``classLevel``, ``expectedSalary``) while Python
attributes stay snake_case. Inputs accept either spelling; responses are
serialized with the camelCase alias. Record ids go out as ``_id``.
"""
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import core_schema


def _accept_both_spellings(name: str) -> AliasChoices:
    return AliasChoices(name, to_camel(name))


class StandardizedModel(BaseModel):  # type: ignore[misc]
    """Base model with standardized JSON encoding"""

    model_config = ConfigDict(
        use_enum_values=True,
        populate_by_name=True,
        from_attributes=True,
        alias_generator=AliasGenerator(
            validation_alias=_accept_both_spellings,
            serialization_alias=to_camel,
        ),
    )


def wire_field(attr_name: str, wire_name: str, default: Any = ..., **kwargs: Any) -> Any:
    """Field whose wire name is not the camelCase of its attribute (``_id``, ``photoURL``)."""
    return Field(
        default,
        validation_alias=AliasChoices(attr_name, wire_name),
        serialization_alias=wire_name,
        **kwargs,
    )


class Money(Decimal):
    """Money field that always serializes as float"""

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any) -> core_schema.CoreSchema:
        def validate_money(value: Any) -> Decimal:
            if isinstance(value, bool):
                raise ValueError("Amount must be a number")
            try:
                if isinstance(value, (int, float)):
                    amount = cls(str(value))
                elif isinstance(value, str):
                    amount = cls(value.strip())
                elif isinstance(value, Decimal):
                    amount = value
                else:
                    raise ValueError(f"Cannot convert {type(value)} to Money")
            except InvalidOperation:
                raise ValueError(f"Invalid amount: {value!r}")
            if not amount.is_finite():
                raise ValueError("Amount must be finite")
            if amount < 0:
                raise ValueError("Amount must not be negative")
            return amount

        return core_schema.no_info_after_validator_function(
            validate_money,
            core_schema.union_schema(
                [
                    core_schema.int_schema(),
                    core_schema.float_schema(),
                    core_schema.str_schema(),
                    core_schema.is_instance_schema(Decimal),
                ]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                float,
                info_arg=False,
                return_schema=core_schema.float_schema(),
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema, handler: Any) -> Any:
        return {"type": "number"}
