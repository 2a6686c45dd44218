"""
Template rendering utilities
"""
from pathlib import Path
from typing import Any, Dict, Union

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from svg_output.core.exceptions import SvgRenderError
from svg_output.core.logging_config import LoggingConfig
from svg_output.models.render import RenderContext

logger = LoggingConfig.get_logger(__name__)


def style_property(properties: Dict[str, Any], name: str, default: Any = "") -> Any:
    """Look up a style property; dotted names descend into nested objects"""
    value: Any = properties
    for part in name.split("."):
        if not isinstance(value, dict) or part not in value:
            return default
        value = value[part]
    return value


class SvgRenderer:
    """Renders <name>.svg Jinja2 templates from a templates directory"""

    def __init__(self, templates_dir: Union[str, Path]):
        self.templates_dir = Path(templates_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "svg"]),
        )

    def template_params(self, context: RenderContext) -> Dict[str, Any]:
        """Variables made available to every SVG template"""
        properties = context.style_properties
        return {
            "style_properties": properties,
            "property": lambda name, default="": style_property(properties, name, default),
            "options": context.options,
            "dir": context.text_direction.value,
            "page_is_rtl": context.is_rtl,
            "style_id": context.resolved_style_id,
            "language_id": context.resolved_language_id,
        }

    def render(self, template_name: str, context: RenderContext) -> bytes:
        """
        Render an SVG template, e.g. "icon-arrow.svg"

        Raises:
            SvgRenderError: template missing, outside the templates directory,
                or failing while rendering
        """
        try:
            template = self.env.get_template(template_name)
            output = template.render(**self.template_params(context))
        except TemplateError as e:
            raise SvgRenderError(
                f"Failed to render {template_name}: {e}",
                metadata={"template": template_name, "error_type": type(e).__name__}
            ) from e
        content = output.encode("utf-8")
        logger.debug("Rendered SVG template", extra={"template": template_name, "size": len(content)})
        return content
