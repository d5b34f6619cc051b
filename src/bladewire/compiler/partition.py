from typing import Dict, Mapping, Tuple

from bladewire.compiler.strings import camel
from bladewire.registry import ClassRegistry


def partition_data_and_attributes(
    class_name: str, attributes: Mapping[str, str], classes: ClassRegistry
) -> Tuple[Dict[str, str], Dict[str, str]]:
    """Split attributes into constructor data and pass-through attributes.

    An attribute is constructor data when its camel-cased name matches a
    constructor parameter, compared case-insensitively. A class that cannot
    be loaded gets every attribute on both sides, since there is nothing to
    partition against.
    """
    if not classes.class_exists(class_name):
        return dict(attributes), dict(attributes)

    parameter_names = {
        camel(name).lower() for name in classes.constructor_parameter_names(class_name)
    }

    data: Dict[str, str] = {}
    rest: Dict[str, str] = {}
    for key, value in attributes.items():
        if camel(key).lower() in parameter_names:
            data[key] = value
        else:
            rest[key] = value

    return data, rest
