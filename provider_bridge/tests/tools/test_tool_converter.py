"""Tool schema conversion across the three dialects."""
from __future__ import annotations

import pytest

from provider_bridge.base.dto.tool_definition import ToolDefinition
from provider_bridge.base.errors import ConversionError, ErrorCategory, classify
from provider_bridge.base.tools import ToolConverter, ToolSchemaFormat

WEATHER_SCHEMA = {
    "type": "object",
    "properties": {
        "city": {"type": "string", "description": "City name"},
        "units": {"type": "string", "enum": ["c", "f"]},
    },
    "required": ["city"],
}


def _weather():
    return ToolDefinition(name="get_weather", description="Current weather", parameters=WEATHER_SCHEMA)


def test_openai_function_shape():
    out = ToolConverter().convert([_weather()], ToolSchemaFormat.OPENAI_FUNCTION)
    assert out == [
        {
            "type": "function",
            "function": {
                "name": "get_weather",
                "description": "Current weather",
                "parameters": WEATHER_SCHEMA,
            },
        }
    ]


def test_anthropic_tool_shape():
    (tool,) = ToolConverter().convert([_weather()], "anthropic_tool")
    assert tool == {"name": "get_weather", "description": "Current weather", "input_schema": WEATHER_SCHEMA}


def test_gemini_declaration_shape():
    (tool,) = ToolConverter().convert([_weather()], ToolSchemaFormat.GEMINI_DECLARATION)
    assert tool["parameters"] == WEATHER_SCHEMA
    assert set(tool) == {"name", "description", "parameters"}


def test_schema_is_copied_not_shared():
    schema = {"type": "object", "properties": {"q": {"type": "string"}}}
    (tool,) = ToolConverter().convert([{"name": "search", "parameters": schema}])
    tool["function"]["parameters"]["properties"]["q"]["type"] = "integer"
    assert schema["properties"]["q"]["type"] == "string"


def test_accepts_mapping_envelopes_and_attribute_objects():
    class Legacy:
        tool_name = "legacy"
        tool_description = "old style"
        tool_parameters = None

    inputs = [
        {"type": "function", "function": {"name": "a", "parameters": {"type": "object"}}},
        {"name": "b", "input_schema": {"type": "object", "properties": {}}},
        Legacy(),
    ]
    out = ToolConverter().convert(inputs, ToolSchemaFormat.ANTHROPIC_TOOL)
    assert [t["name"] for t in out] == ["a", "b", "legacy"]
    assert out[2]["input_schema"] == {"type": "object", "properties": {}}
    assert out[0]["description"] == ""


def test_missing_parameters_default_to_empty_object():
    (tool,) = ToolConverter().convert([{"name": "ping"}])
    assert tool["function"]["parameters"] == {"type": "object", "properties": {}}


@pytest.mark.parametrize(
    "keyword, fragment",
    [
        ("$ref", {"$ref": "#/$defs/Thing"}),
        ("oneOf", {"oneOf": [{"type": "string"}, {"type": "integer"}]}),
        ("additionalProperties", {"type": "object", "additionalProperties": {"type": "string"}}),
        ("const", {"const": 3}),
    ],
)
def test_gemini_rejects_unsupported_keywords(keyword, fragment):
    definition = {"name": "t", "parameters": {"type": "object", "properties": {"x": fragment}}}
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([definition], ToolSchemaFormat.GEMINI_DECLARATION)
    assert exc.value.tool == "t"
    assert exc.value.path == f"/properties/x/{keyword}"


def test_gemini_rejects_type_unions_but_openai_keeps_them():
    definition = {"name": "t", "parameters": {"type": "object", "properties": {"x": {"type": ["string", "null"]}}}}
    (tool,) = ToolConverter().convert([definition], ToolSchemaFormat.OPENAI_FUNCTION)
    assert tool["function"]["parameters"]["properties"]["x"]["type"] == ["string", "null"]
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([definition], ToolSchemaFormat.GEMINI_DECLARATION)
    assert exc.value.path == "/properties/x/type"


def test_gemini_accepts_any_of():
    definition = {
        "name": "t",
        "parameters": {"type": "object", "properties": {"x": {"anyOf": [{"type": "string"}, {"type": "integer"}]}}},
    }
    (tool,) = ToolConverter().convert([definition], ToolSchemaFormat.GEMINI_DECLARATION)
    assert "anyOf" in tool["parameters"]["properties"]["x"]


@pytest.mark.parametrize(
    "parameters, path",
    [
        ({"type": "array", "items": {"type": "string"}}, "/type"),
        ({"type": "object", "properties": {"x": {"type": "text"}}}, "/properties/x/type"),
        ({"type": "object", "properties": {}, "required": ["missing"]}, "/required"),
        ({"type": "object", "properties": {"x": "string"}}, "/properties/x"),
        ({"type": "object", "properties": {"x": {"type": "array", "items": {"type": "blob"}}}}, "/properties/x/items/type"),
    ],
)
def test_invalid_schemas_raise_with_path(parameters, path):
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([{"name": "bad", "parameters": parameters}])
    assert exc.value.path == path


def test_invalid_name_rejected():
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([{"name": "has space"}])
    assert "invalid tool definition" in exc.value.message


def test_unknown_target_format_rejected():
    with pytest.raises(ConversionError):
        ToolConverter().convert([_weather()], "xml_tool")


def test_conversion_error_classifies_as_tool_conversion_error():
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([{"name": "t", "parameters": {"type": "object", "properties": {"x": {"const": 1}}}}], "gemini_declaration")
    normalized = classify(exc.value)
    assert normalized.category is ErrorCategory.TOOL_CONVERSION_ERROR
    assert normalized.reason == "tool_conversion_error"


def test_first_failure_aborts_whole_batch():
    good = {"name": "ok"}
    bad = {"name": "bad", "parameters": {"type": "string"}}
    with pytest.raises(ConversionError) as exc:
        ToolConverter().convert([good, bad])
    assert exc.value.tool == "bad"


def test_failure_is_logged(bridge_logs):
    with pytest.raises(ConversionError):
        ToolConverter().convert([{"name": "bad", "parameters": {"type": "string"}}])
    assert "tools.conversion_failed" in bridge_logs.text


def test_empty_input_converts_to_empty_list():
    assert ToolConverter().convert([]) == []
    assert ToolConverter().convert(None) == []
