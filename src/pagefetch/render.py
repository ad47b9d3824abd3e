"""Presentation transform applied to a response body before display."""

from .core import Response

ENTITIES = {"&lt;": "<", "&gt;": ">"}


def show(response: Response) -> str:
    """Return the body as text, with tags stripped unless this is a view-source fetch."""
    body = response.text
    if response.view_source:
        return body

    out = []
    in_tag = False
    i = 0
    while i < len(body):
        c = body[i]
        if c == "<":
            in_tag = True
        elif c == ">":
            in_tag = False
        elif not in_tag:
            entity = body[i:i + 4]
            if entity in ENTITIES:
                out.append(ENTITIES[entity])
                i += 4
                continue
            out.append(c)
        i += 1
    return "".join(out)
