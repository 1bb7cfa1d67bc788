from .sub_element import SubElement

__all__ = [
    "SubElement",
]
