"""POJO generator: derives Java data classes from a JSON request body."""

import json
import re
from typing import Any

from curl_restassured.generator.code import java_string

LOMBOK_ANNOTATIONS = {
    "Data",
    "Builder",
    "NoArgsConstructor",
    "AllArgsConstructor",
    "Getter",
    "Setter",
    "ToString",
    "EqualsAndHashCode",
    "Value",
}

JAVA_KEYWORDS = {
    "abstract", "boolean", "break", "byte", "case", "catch", "char", "class", "const",
    "continue", "default", "do", "double", "else", "enum", "extends", "final", "finally",
    "float", "for", "goto", "if", "implements", "import", "instanceof", "int", "interface",
    "long", "native", "new", "package", "private", "protected", "public", "return", "short",
    "static", "super", "switch", "synchronized", "this", "throw", "throws", "transient",
    "try", "void", "volatile", "while", "true", "false", "null",
}

INT_MAX = 2**31 - 1


def _words(key: str) -> list[str]:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", key)
    return [w for w in re.split(r"[^A-Za-z0-9]+", spaced) if w]


def to_field_name(key: str) -> str:
    words = _words(key) or ["field"]
    name = words[0].lower() + "".join(w.capitalize() for w in words[1:])
    if name[0].isdigit():
        name = f"_{name}"
    if name in JAVA_KEYWORDS:
        name = f"{name}Value"
    return name


def to_class_name(key: str) -> str:
    words = _words(key) or ["Item"]
    name = "".join(w[0].upper() + w[1:] for w in words)
    if name[0].isdigit():
        name = f"Item{name}"
    return name


def _singular(name: str) -> str:
    if name.endswith("ies") and len(name) > 3:
        return name[:-3] + "y"
    if name.endswith("s") and not name.endswith("ss") and len(name) > 1:
        return name[:-1]
    return f"{name}Item"


class PojoGenerator:
    """Generates one class per distinct object shape found in a JSON body.

    Objects with identical field names and types share a single class.
    """

    def __init__(self, root_name: str, annotations: list[str]):
        self.root_name = root_name
        self.annotations = annotations
        self._classes: dict[str, list[tuple[str, str, str]]] = {}
        self._shapes: dict[tuple, str] = {}

    def generate(self, body: Any) -> dict[str, str]:
        """Returns dict of {class_name: java_source}; empty for non-object bodies."""
        self._classes = {}
        self._shapes = {}

        root = self._root_object(body)
        if root is None:
            return {}

        root_name = self._class_for(root, self.root_name)
        names = [root_name] + [n for n in self._classes if n != root_name]
        return {name: self._render_class(name, self._classes[name]) for name in names}

    def _root_object(self, body: Any) -> dict | None:
        if isinstance(body, str):
            try:
                body = json.loads(body)
            except ValueError:
                return None
        if isinstance(body, list):
            body = next((item for item in body if isinstance(item, dict)), None)
        return body if isinstance(body, dict) else None

    def _class_for(self, obj: dict, name: str) -> str:
        fields = [(key, to_field_name(key), self._java_type(key, value)) for key, value in obj.items()]
        shape = tuple((key, java_type) for key, _, java_type in fields)
        if shape in self._shapes:
            return self._shapes[shape]

        unique = name
        counter = 2
        while unique in self._classes:
            unique = f"{name}{counter}"
            counter += 1
        self._classes[unique] = fields
        self._shapes[shape] = unique
        return unique

    def _java_type(self, key: str, value: Any) -> str:
        if isinstance(value, bool):
            return "Boolean"
        if isinstance(value, int):
            return "Integer" if abs(value) <= INT_MAX else "Long"
        if isinstance(value, float):
            return "Double"
        if isinstance(value, str):
            return "String"
        if isinstance(value, dict):
            return self._class_for(value, to_class_name(key))
        if isinstance(value, list):
            first = next((item for item in value if item is not None), None)
            if first is None:
                return "List<Object>"
            if isinstance(first, dict):
                return f"List<{self._class_for(first, _singular(to_class_name(key)))}>"
            return f"List<{self._java_type(key, first)}>"
        return "Object"

    def _render_class(self, name: str, fields: list[tuple[str, str, str]]) -> str:
        needs_json_property = any(key != field for key, field, _ in fields)
        needs_list = any(java_type.startswith("List<") for _, _, java_type in fields)

        imports = []
        if needs_json_property:
            imports.append("import com.fasterxml.jackson.annotation.JsonProperty;")
        if needs_list:
            imports.append("import java.util.List;")
        for annotation in self.annotations:
            simple = annotation.lstrip("@").split("(", 1)[0]
            if simple in LOMBOK_ANNOTATIONS:
                imports.append(f"import lombok.{simple};")

        lines = sorted(set(imports))
        if lines:
            lines.append("")
        lines += list(self.annotations)
        lines += [f"public class {name} {{", ""]

        visibility = "private" if self.annotations else "public"
        for key, field, java_type in fields:
            if key != field:
                lines.append(f"    @JsonProperty({java_string(key)})")
            lines.append(f"    {visibility} {java_type} {field};")
            lines.append("")

        if lines[-1] == "":
            lines.pop()
        lines.append("}")
        return "\n".join(lines) + "\n"


def combine_classes(classes: dict[str, str]) -> str:
    """Join generated classes into a single listing, one file per section."""
    return "\n".join(f"// {name}.java\n{source}" for name, source in classes.items())
