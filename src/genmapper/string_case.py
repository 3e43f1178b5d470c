import re


def snake2camel(value: str, *, lower_first: bool = False) -> str:
    parts = [part for part in re.split(r"[_\W]+", value) if part]
    camel = "".join(part[:1].upper() + part[1:].lower() for part in parts)

    if lower_first and camel:
        return camel[:1].lower() + camel[1:]

    return camel
