"""Entity handling for attribute values and inner text.

Only the four XML entities are recognised. Numeric references and the
HTML5 named entity table are left untouched.
"""

# Order matters: "&amp;" goes last so "&amp;lt;" decodes to "&lt;", not "<".
XML_ENTITIES = (
    ("&quot;", '"'),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def xml_unescape(text):
    if not text or "&" not in text:
        return text
    for entity, char in XML_ENTITIES:
        text = text.replace(entity, char)
    return text
