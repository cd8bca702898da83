"""Tool definitions and the invoke path every call goes through.

A tool is declared once with `define` and called with `invoke`:

    TOOL = define({
        "id": "get-weather",
        "name": "Get Weather",
        "description": "Fetches current weather for a coordinate pair",
        "input": WeatherInput,
        "output": WeatherOutput,
        "pricing": {"pricePerUse": 0, "currency": "USD"},
        "handler": get_weather,
    })

`invoke` validates input before the handler runs, and turns any upstream
failure into a well-formed apology result so callers always get
`{text, data, ui}` back.
"""
import dataclasses
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type

import pydantic
import requests
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from toolkit import http, render
from toolkit.config import Settings
from toolkit.credentials import CredentialStore, MemoryCredentialStore
from toolkit.errors import InputValidationError, UpstreamFailure, ValidationError

logger = logging.getLogger(__name__)

_CURRENCY = re.compile(r"^[A-Z]{3}$")


class Schema(BaseModel):
    """Base for tool input/output models: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InputSchema(Schema):
    """Base for tool inputs. Strict, so "40" or true never pass as a number."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, strict=True)


@dataclass(frozen=True)
class Pricing:
    amount: float = 0.0
    currency: str = "USD"

    def to_dict(self) -> Dict[str, Any]:
        return {"pricePerUse": self.amount, "currency": self.currency}


@dataclass(frozen=True)
class CallerContext:
    """Who is calling, plus the services a handler may use for this call."""

    caller_id: str
    settings: Settings = field(default_factory=Settings)
    credentials: CredentialStore = field(default_factory=MemoryCredentialStore)
    session: Optional[requests.Session] = None

    def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        return http.get_json(
            url, params, headers=headers, session=self.session, timeout=self.settings.timeout
        )


@dataclass
class ToolResult:
    text: str
    data: Optional[Dict[str, Any]] = None
    ui: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, text: str, output: BaseModel, ui: Optional[Dict[str, Any]] = None) -> "ToolResult":
        return cls(text=text, data=output.model_dump(by_alias=True), ui=ui)

    @classmethod
    def failure(cls, text: str, title: str = "Something went wrong", variant: str = "error") -> "ToolResult":
        return cls(text=text, data=None, ui=render.alert(text, title=title, variant=variant))

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "data": self.data, "ui": self.ui}


Handler = Callable[[Any, CallerContext], ToolResult]


@dataclass(frozen=True)
class ToolDefinition:
    id: str
    name: str
    description: str
    input: Type[BaseModel]
    output: Type[BaseModel]
    handler: Handler
    pricing: Pricing = field(default_factory=Pricing)
    requires: Tuple[str, ...] = ()
    usage: Dict[str, Any] = field(default_factory=dict)
    failure_text: str = ""

    def input_schema(self) -> Dict[str, Any]:
        return self.input.model_json_schema(by_alias=True)

    def output_schema(self) -> Dict[str, Any]:
        return self.output.model_json_schema(by_alias=True)

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "pricing": self.pricing.to_dict(),
            "usage": self.usage,
            "inputSchema": self.input_schema(),
            "outputSchema": self.output_schema(),
        }


def define(spec: Optional[Mapping[str, Any]] = None, **fields: Any) -> ToolDefinition:
    """Build a ToolDefinition from a dict and/or keyword arguments.

    Raises ValidationError if the id is empty, a schema is missing or not a
    pydantic model, the handler is not callable, or pricing is invalid.
    """
    values: Dict[str, Any] = dict(spec or {})
    values.update(fields)

    tool_id = values.get("id")
    if not isinstance(tool_id, str) or not tool_id.strip():
        raise ValidationError("Tool id must be a non-empty string")

    for key in ("input", "output"):
        schema = values.get(key)
        if schema is None:
            raise ValidationError(f"Tool '{tool_id}' is missing its {key} schema")
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise ValidationError(f"Tool '{tool_id}' {key} schema must be a pydantic model")

    handler = values.get("handler")
    if not callable(handler):
        raise ValidationError(f"Tool '{tool_id}' handler is not callable")

    name = values.get("name") or tool_id
    return ToolDefinition(
        id=tool_id,
        name=name,
        description=values.get("description", ""),
        input=values["input"],
        output=values["output"],
        handler=handler,
        pricing=_pricing(tool_id, values.get("pricing")),
        requires=tuple(values.get("requires", ())),
        usage=dict(values.get("usage", {})),
        failure_text=values.get("failure_text")
        or f"Sorry, {name} is not available right now. Please try again later.",
    )


def invoke(definition: ToolDefinition, raw_input: Optional[Mapping[str, Any]], caller: CallerContext) -> ToolResult:
    """Validate input, run the handler, and always return a ToolResult.

    Only InputValidationError propagates; it is raised before any outbound call.
    """
    try:
        params = definition.input.model_validate(raw_input if raw_input is not None else {})
    except pydantic.ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        raise InputValidationError(definition.id, errors) from exc

    logger.info(
        "User / Agent %s requested %s with %s",
        caller.caller_id,
        definition.id,
        params.model_dump(by_alias=True),
    )

    try:
        result = definition.handler(params, caller)
    except UpstreamFailure as exc:
        logger.warning("%s upstream failure for %s: %s", definition.id, caller.caller_id, exc)
        return ToolResult.failure(exc.user_message or definition.failure_text)
    except Exception:
        logger.exception("%s raised while handling a request from %s", definition.id, caller.caller_id)
        return ToolResult.failure(definition.failure_text)

    if not isinstance(result, ToolResult):
        logger.error("%s returned %r instead of a ToolResult", definition.id, type(result).__name__)
        return ToolResult.failure(definition.failure_text)

    if result.data is None:
        return result

    try:
        output = definition.output.model_validate(result.data)
    except pydantic.ValidationError as exc:
        logger.error("%s produced data that does not match its output schema: %s", definition.id, exc)
        return ToolResult.failure(definition.failure_text)
    return dataclasses.replace(result, data=output.model_dump(by_alias=True))


def _pricing(tool_id: str, value: Any) -> Pricing:
    if value is None:
        return Pricing()
    if isinstance(value, Pricing):
        pricing = value
    elif isinstance(value, Mapping):
        amount = value.get("amount", value.get("pricePerUse", 0))
        pricing = Pricing(amount=amount, currency=value.get("currency", "USD"))
    else:
        raise ValidationError(f"Tool '{tool_id}' pricing must be a mapping")

    if not isinstance(pricing.amount, (int, float)) or pricing.amount < 0:
        raise ValidationError(f"Tool '{tool_id}' price must be a non-negative number")
    if not isinstance(pricing.currency, str) or not _CURRENCY.match(pricing.currency):
        raise ValidationError(f"Tool '{tool_id}' currency must be a three-letter code")
    return pricing
