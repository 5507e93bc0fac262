from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from .point_editors import PointEditorComponent

point_editor_registry: dict[str, type["PointEditorComponent"]] = {}


def register_point_editor(name: str):
    def _decorator(cls: type["PointEditorComponent"]) -> type["PointEditorComponent"]:
        if not name or name in point_editor_registry:
            raise ValueError(f"Invalid or duplicate point editor name '{name}'")
        point_editor_registry[name] = cls
        return cls
    return _decorator


def point_editor_name(editor: "PointEditorComponent") -> str | None:
    return {v: k for k, v in point_editor_registry.items()}.get(type(editor))
