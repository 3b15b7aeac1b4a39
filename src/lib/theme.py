"""
Presentation theme and stylesheet injection for decorated messages.

The formatter only emits class names; a theme supplies the CSS that makes
them visible. A theme is a YAML file overriding any of the built-in values:

    colors:
      "0": "#7DDA58"
      "3": "#FF3636"
    formats:
      bold:
        font-weight: bold
    reset:
      color: inherit !important
    status:
      - text: IN PRODUCTION
        class: status-in-production
        style:
          color: green !important

message-format-obfuscated intentionally has no rule: its visual effect is
not defined anywhere.
"""

import copy
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.status import DEFAULT_STATUS_RULES, StatusRule
from .codes import RESET_CLASS
from .document import Document, Element, RawNode
from .log import LOG


class ThemeError(Exception):
    """Raised when theme loading or validation fails"""
    pass


DEFAULT_THEME: Dict[str, Any] = {
    'colors': {
        '0': '#7DDA58',
        '1': '#FFDD36',
        '2': '#FF8636',
        '3': '#FF3636',
        '4': '#9636FD',
        '5': '#3D2DE6',
    },
    'formats': {
        'bold': {'font-weight': 'bold'},
        'strikethrough': {'text-decoration': 'line-through'},
        'underline': {'text-decoration': 'underline'},
        'italic': {'font-style': 'italic'},
    },
    'reset': {
        'color': 'inherit !important',
        'font-weight': 'normal !important',
        'font-style': 'normal !important',
        'text-decoration': 'none !important',
    },
    'status': [
        {'text': rule.text, 'class': rule.class_name, 'style': dict(rule.declarations)}
        for rule in DEFAULT_STATUS_RULES
    ],
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base; lists are replaced"""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _rule_render(selector: str, declarations: Dict[str, Any]) -> str:
    body = ' '.join(f'{prop}: {value};' for prop, value in declarations.items())
    return f'{selector} {{ {body} }}'


class Theme:
    """
    Presentation values for message and status classes.

    Attributes:
        name: Theme name (file stem, or "default")
        config: Built-in values merged with the theme file, if any
    """

    def __init__(self, theme_file: Optional[str] = None):
        """
        Load a theme.

        Args:
            theme_file: Path to a theme YAML file; None uses the built-in values

        Raises:
            ThemeError: If the file doesn't exist or isn't a valid YAML mapping
        """
        if theme_file is None:
            self.name = "default"
            self.config = copy.deepcopy(DEFAULT_THEME)
            return

        path = Path(theme_file)
        if not path.exists():
            raise ThemeError(f"Theme file not found: {path}")

        self.name = path.stem
        self.config = _merge(DEFAULT_THEME, self._config_load(path))

    @staticmethod
    def _config_load(path: Path) -> Dict[str, Any]:
        """Load and parse a theme YAML file"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                config: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeError(f"Failed to parse {path.name}: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ThemeError(f"{path.name} must contain a mapping, got {type(config).__name__}")
        return config

    def config_get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Supports nested keys with dot notation:
          theme.config_get('colors.3', '#f00')
        """
        value: Any = self.config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def statusRules_get(self) -> List[StatusRule]:
        """
        Status rules declared by the theme.

        Raises:
            ThemeError: If an entry lacks its text or class
        """
        rules: List[StatusRule] = []
        for entry in self.config_get('status', []) or []:
            if not isinstance(entry, dict) or 'text' not in entry or 'class' not in entry:
                raise ThemeError(f"Status rule needs 'text' and 'class': {entry!r}")
            rules.append(StatusRule(
                text=str(entry['text']),
                class_name=str(entry['class']),
                declarations=dict(entry.get('style') or {}),
            ))
        return rules

    def stylesheet_render(self, status_class: str = "status-value") -> str:
        """
        Build the CSS for every presented class.

        Args:
            status_class: Class carried by status indicator elements

        Returns:
            Stylesheet text, one rule per line
        """
        lines: List[str] = ['/* Color Modifiers */']
        for digit, color in self.config_get('colors', {}).items():
            lines.append(_rule_render(f'.message-color-{digit}', {'color': color}))

        lines.append('/* Formatting Styles */')
        for name, declarations in self.config_get('formats', {}).items():
            lines.append(_rule_render(f'.message-format-{name}', declarations))

        lines.append(_rule_render(f'.{RESET_CLASS}', self.config_get('reset', {})))

        lines.append('/* Status Indicator Styles */')
        for rule in self.statusRules_get():
            if rule.declarations:
                lines.append(_rule_render(f'.{status_class}.{rule.class_name}', rule.declarations))

        return '\n'.join(lines) + '\n'

    def __repr__(self) -> str:
        return f"Theme(name='{self.name}')"


def styles_inject(document: Document, theme: Optional[Theme] = None,
                  styles_id: Optional[str] = None, status_class: Optional[str] = None) -> bool:
    """
    Add the theme stylesheet to the document head, once.

    Args:
        document: Parsed page
        theme: Theme to render; defaults to the configured theme
        styles_id: id of the <style> element; defaults to settings
        status_class: Status element class; defaults to settings

    Returns:
        True if a <style> element was added, False if one was already present
    """
    from ..config import appsettings

    styles_id = styles_id or appsettings.styles_id
    status_class = status_class or appsettings.status_class

    if document.element_findById(styles_id) is not None:
        LOG(f"Stylesheet #{styles_id} already present", level=3)
        return False

    if theme is None:
        theme = Theme(appsettings.theme_file)

    style = Element('style', [('id', styles_id), ('type', 'text/css')])
    css = theme.stylesheet_render(status_class)
    style.child_append(RawNode(css, css))

    head = document.head_get()
    if head is None:
        # Fragments without a head get the stylesheet up front
        document.child_insert(0, style)
    else:
        head.child_append(style)

    LOG(f"Injected stylesheet #{styles_id} from theme '{theme.name}'", level=2)
    return True
