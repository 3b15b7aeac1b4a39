"""
Minimal HTML document model

Parses an HTML page into a small element tree that the board decorator, the
status classifier and the stylesheet injector can query and edit, then
renders it back to HTML.

Only what those passes need is modelled:
- Elements with tag, ordered attributes, children and parent
- Text nodes (stored unescaped, escaped on render)
- Raw nodes for markup that must be emitted verbatim (comments, doctype,
  decoded message markup)

Example:
    >>> doc = document_parse('<div class="message">&1Hi</div>')
    >>> [el.tag for el in doc.elements_findByClass("message")]
    ['div']
"""

from html.parser import HTMLParser
from typing import Callable, Iterator, List, Optional, Tuple, Union

from .escape import text_escape

VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
})

# Elements whose text content is emitted without escaping
RAW_TEXT_ELEMENTS = frozenset({'script', 'style'})


class TextNode:
    """A run of character data, stored unescaped"""

    def __init__(self, text: str) -> None:
        self.text = text
        self.parent: Optional["Element"] = None

    def html_render(self) -> str:
        if self.parent is not None and self.parent.tag in RAW_TEXT_ELEMENTS:
            return self.text
        return text_escape(self.text)

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


class RawNode:
    """
    Markup emitted verbatim

    Attributes:
        markup: HTML to emit as-is
        text: Text content the markup stands for
    """

    def __init__(self, markup: str, text: str = "") -> None:
        self.markup = markup
        self.text = text
        self.parent: Optional["Element"] = None

    def html_render(self) -> str:
        return self.markup

    def __repr__(self) -> str:
        return f"RawNode({self.markup!r})"


Node = Union["Element", TextNode, RawNode]


class Element:
    """
    An HTML element

    Attributes:
        tag: Lower-case tag name
        attrs: Attributes in source order, values may be None
        children: Child nodes in document order
        parent: Enclosing element, None for the document root
    """

    def __init__(self, tag: str, attrs: Optional[List[Tuple[str, Optional[str]]]] = None) -> None:
        self.tag = tag
        self.attrs: List[Tuple[str, Optional[str]]] = list(attrs or [])
        self.children: List[Node] = []
        self.parent: Optional["Element"] = None

    # ------------------------------------------------------------------
    # Attributes and classes
    # ------------------------------------------------------------------

    def attr_get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def attr_set(self, name: str, value: Optional[str]) -> None:
        for index, (key, _) in enumerate(self.attrs):
            if key == name:
                self.attrs[index] = (name, value)
                return
        self.attrs.append((name, value))

    def classes(self) -> List[str]:
        """Whitespace-separated entries of the class attribute"""
        return (self.attr_get('class') or '').split()

    def class_has(self, name: str) -> bool:
        return name in self.classes()

    def class_add(self, name: str) -> None:
        """Append a class unless it is already present"""
        classes = self.classes()
        if name not in classes:
            classes.append(name)
            self.attr_set('class', ' '.join(classes))
            self.mutation_notify()

    # ------------------------------------------------------------------
    # Tree navigation and editing
    # ------------------------------------------------------------------

    def child_append(self, node: Node) -> None:
        node.parent = self
        self.children.append(node)
        self.mutation_notify()

    def child_insert(self, index: int, node: Node) -> None:
        node.parent = self
        self.children.insert(index, node)
        self.mutation_notify()

    def children_replace(self, *nodes: Node) -> None:
        """Drop all children and adopt nodes instead"""
        for child in self.children:
            child.parent = None
        self.children = []
        for node in nodes:
            node.parent = self
            self.children.append(node)
        self.mutation_notify()

    def document_get(self) -> Optional["Document"]:
        """The Document this element belongs to, if it is attached to one"""
        element: Element = self
        while element.parent is not None:
            element = element.parent
        return element if isinstance(element, Document) else None

    def mutation_notify(self) -> None:
        """Tell the owning document's observers that this subtree changed"""
        document = self.document_get()
        if document is not None:
            document.observers_notify(self)

    def iter(self) -> Iterator["Element"]:
        """This element and all descendant elements, depth first"""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def elements_findByClass(self, name: str) -> List["Element"]:
        return [element for element in self.iter() if element.class_has(name)]

    def element_findByTag(self, tag: str) -> Optional["Element"]:
        for element in self.iter():
            if element.tag == tag:
                return element
        return None

    def element_findById(self, element_id: str) -> Optional["Element"]:
        for element in self.iter():
            if element.attr_get('id') == element_id:
                return element
        return None

    def text_content(self) -> str:
        """Concatenated text of all descendants, like the DOM textContent"""
        parts: List[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text_content())
            else:
                parts.append(child.text)
        return ''.join(parts)

    def firstTextNode_get(self) -> Optional[TextNode]:
        """First direct child that is a text node, ignoring child elements"""
        for child in self.children:
            if isinstance(child, TextNode):
                return child
        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def attrs_render(self) -> str:
        parts = []
        for key, value in self.attrs:
            if value is None:
                parts.append(f' {key}')
            else:
                parts.append(f' {key}="{text_escape(value)}"')
        return ''.join(parts)

    def innerHtml_render(self) -> str:
        return ''.join(child.html_render() for child in self.children)

    def html_render(self) -> str:
        opening = f'<{self.tag}{self.attrs_render()}>'
        if self.tag in VOID_ELEMENTS:
            return opening
        return f'{opening}{self.innerHtml_render()}</{self.tag}>'

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, classes={self.classes()})"


class Document(Element):
    """Root of a parsed page; renders as the concatenation of its children"""

    def __init__(self) -> None:
        super().__init__('#document')
        self.observers: List[Callable[[Element], object]] = []
        self._notifying = False

    def observer_add(self, callback: Callable[[Element], object]) -> Callable[[Element], object]:
        """
        Call callback with the changed element after every tree mutation

        Mutations made by observers themselves are not reported again.

        Returns:
            callback, for later observer_remove()
        """
        self.observers.append(callback)
        return callback

    def observer_remove(self, callback: Callable[[Element], object]) -> None:
        if callback in self.observers:
            self.observers.remove(callback)

    def observers_notify(self, target: Element) -> None:
        if self._notifying or not self.observers:
            return
        self._notifying = True
        try:
            for callback in list(self.observers):
                callback(target)
        finally:
            self._notifying = False

    def html_render(self) -> str:
        return self.innerHtml_render()

    def head_get(self) -> Optional[Element]:
        return self.element_findByTag('head')


class _TreeBuilder(HTMLParser):
    """HTMLParser subclass assembling a Document"""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Document()
        self.stack: List[Element] = [self.document]

    @property
    def current(self) -> Element:
        return self.stack[-1]

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        element = Element(tag, attrs)
        self.current.child_append(element)
        if tag not in VOID_ELEMENTS:
            self.stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.current.child_append(Element(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        # Close up to the nearest matching open element; stray end tags are dropped
        for depth in range(len(self.stack) - 1, 0, -1):
            if self.stack[depth].tag == tag:
                del self.stack[depth:]
                return

    def handle_data(self, data: str) -> None:
        self.current.child_append(TextNode(data))

    def handle_comment(self, data: str) -> None:
        self.current.child_append(RawNode(f'<!--{data}-->'))

    def handle_decl(self, decl: str) -> None:
        self.current.child_append(RawNode(f'<!{decl}>'))

    def handle_pi(self, data: str) -> None:
        self.current.child_append(RawNode(f'<?{data}>'))


def document_parse(source: str) -> Document:
    """
    Parse HTML source into a Document

    Args:
        source: HTML page or fragment

    Returns:
        Document tree; malformed nesting is repaired, never rejected
    """
    builder = _TreeBuilder()
    builder.feed(source)
    builder.close()
    return builder.document
