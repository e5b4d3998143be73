"""Helper utilities"""
import re
from typing import Dict, Any


def deep_get(dictionary: Dict, keys: str, default: Any = None) -> Any:
    """Get nested dictionary value using dot notation"""
    value = dictionary

    for key in keys.split('.'):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def interpolate_string(template: str, data: Dict) -> str:
    """Substitute <name>, {name} and ${name} placeholders from data"""
    for key, value in data.items():
        template = template.replace(f"<{key}>", str(value))
        template = template.replace(f"${{{key}}}", str(value))
        template = template.replace(f"{{{key}}}", str(value))
    return template


def camel_to_snake(name: str) -> str:
    """Convert a camelCase contract key to a snake_case attribute name"""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', name).lower()


def truncate(text: str, limit: int = 80) -> str:
    """Shorten text for log messages"""
    return text if len(text) <= limit else text[:limit - 3] + '...'
