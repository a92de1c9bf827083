#!/usr/bin/env python3
"""Generate TypeScript types from Pydantic models.

Exports JSON schemas of the graph, trace and API models and writes
matching TypeScript declarations for a browser renderer.

Usage:
    python scripts/generate_types.py [output_path]

Output (default):
    frontend/src/lib/generated/types.ts
"""

import sys
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from graph import Graph, GraphEdge, GraphNode, TraceStep
from server import (
    GraphRequest,
    GraphResponse,
    GraphStats,
    LogEntry,
    RandomGraphRequest,
    RandomGraphResponse,
    SessionResponse,
    SortRequest,
    TraceResponse,
)
from sorting import SortFailure, SortSuccess

PRIMITIVES = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
    "null": "null",
}

MODELS: list[type[BaseModel]] = [
    # Core types
    Graph,
    GraphNode,
    GraphEdge,
    TraceStep,
    # Outcomes
    SortSuccess,
    SortFailure,
    # API types
    GraphRequest,
    GraphStats,
    GraphResponse,
    RandomGraphRequest,
    RandomGraphResponse,
    SortRequest,
    TraceResponse,
    SessionResponse,
    LogEntry,
]


def resolve_type(schema: dict[str, Any]) -> str:
    """Resolve a JSON Schema fragment to a TypeScript type expression."""
    if "$ref" in schema:
        return schema["$ref"].split("/")[-1]

    # Unions: Optional fields (anyOf) and discriminated unions (oneOf)
    for key in ("anyOf", "oneOf"):
        if key in schema:
            types = list(dict.fromkeys(resolve_type(s) for s in schema[key]))
            return " | ".join(types)

    if "const" in schema:
        const = schema["const"]
        return f"'{const}'" if isinstance(const, str) else str(const).lower()

    if "enum" in schema:
        return " | ".join(f"'{v}'" if isinstance(v, str) else str(v) for v in schema["enum"])

    json_type = schema.get("type")
    if json_type == "array":
        # Fixed-length tuples such as active_edge
        if "prefixItems" in schema:
            return f"[{', '.join(resolve_type(s) for s in schema['prefixItems'])}]"
        return f"{resolve_type(schema.get('items', {}))}[]"

    if json_type == "object":
        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            return f"Record<string, {resolve_type(additional)}>"
        return "Record<string, unknown>"

    if isinstance(json_type, list):
        return " | ".join(PRIMITIVES.get(t, "unknown") for t in json_type)

    return PRIMITIVES.get(json_type, "unknown")


def schema_to_typescript(name: str, schema: dict[str, Any], indent: str = "  ") -> str:
    """Convert a model or enum schema into one TypeScript declaration."""
    if "enum" in schema:
        return f"export type {name} = {resolve_type(schema)};"

    if "properties" not in schema:
        return f"export type {name} = {resolve_type(schema)};"

    required = set(schema.get("required", []))
    lines = [f"export interface {name} {{"]
    for prop_name, prop_schema in schema["properties"].items():
        optional = "" if prop_name in required else "?"
        lines.append(f"{indent}{prop_name}{optional}: {resolve_type(prop_schema)};")
    lines.append("}")
    return "\n".join(lines)


def generate_typescript(models: list[type[BaseModel]]) -> str:
    """Render TypeScript for the models and every definition they reference."""
    definitions: dict[str, dict[str, Any]] = {}
    model_schemas: list[tuple[str, dict[str, Any]]] = []

    for model in models:
        schema = model.model_json_schema()
        definitions.update(schema.pop("$defs", {}))
        model_schemas.append((model.__name__, schema))

    lines = [
        "/**",
        " * AUTO-GENERATED TypeScript types from Python Pydantic models.",
        " * Do not edit manually - regenerate using: python scripts/generate_types.py",
        " */",
        "",
    ]
    generated: set[str] = set()

    # Enums and nested definitions first, then the requested models
    for name, schema in [*definitions.items(), *model_schemas]:
        if name in generated:
            continue
        lines.append(schema_to_typescript(name, schema))
        lines.append("")
        generated.add(name)

    return "\n".join(lines)


def main() -> None:
    """Main entry point."""
    default_path = Path(__file__).parent.parent / "frontend" / "src" / "lib" / "generated" / "types.ts"
    output_path = Path(sys.argv[1]) if len(sys.argv) > 1 else default_path

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_typescript(MODELS))
    print(f"Generated {output_path}")
    print(f"\nGenerated {len(MODELS)} TypeScript types")


if __name__ == "__main__":
    main()
