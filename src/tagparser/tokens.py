class TagRecord:
    """One tag occurrence in document order.

    ``parsed_attributes`` and ``cached_inner_text`` start as ``None`` and are
    filled in once by :class:`tagparser.element.Element`.
    """

    __slots__ = (
        "cached_inner_text",
        "is_closing",
        "parsed_attributes",
        "raw_attributes",
        "tag_name",
        "trailing_text",
    )

    def __init__(self, is_closing, tag_name, raw_attributes=None, trailing_text=""):
        self.is_closing = bool(is_closing)
        self.tag_name = tag_name
        self.raw_attributes = raw_attributes
        self.trailing_text = trailing_text
        self.parsed_attributes = None
        self.cached_inner_text = None

    @property
    def is_self_closing(self):
        return self.raw_attributes is not None and self.raw_attributes.endswith("/")

    def __repr__(self):
        slash = "/" if self.is_closing else ""
        attrs = self.raw_attributes or ""
        return f"<{slash}{self.tag_name}{attrs}> {self.trailing_text!r}"
