from typing import List, Optional

UNDEFINED = "undefined"


def render_value(values: Optional[List[str]]) -> str:
    """Render a query parameter the way it is echoed back to the client.

    Absent parameters become ``undefined``; repeated ones are joined with a
    comma. Values are not escaped.
    """
    if values is None:
        return UNDEFINED
    return ",".join(values)


def greeting(first_name: Optional[List[str]], last_name: Optional[List[str]]) -> str:
    return f"Hello {render_value(first_name)} {render_value(last_name)}"
