"""
Status indicator classification

Tags status elements by the exact literal text of their first direct text
node. Child elements are ignored: for

    <span class="status-value">IN PRODUCTION<small>since May</small></span>

the text considered is "IN PRODUCTION". Elements already carrying one of the
rule classes are skipped.

statuses_watch() keeps a document classified: every later mutation of the
tree re-runs the pass, so status elements added afterwards are tagged too.
"""

from typing import Callable, Iterable, List, Optional

from ..models.status import DEFAULT_STATUS_RULES, StatusRule
from .document import Document, Element
from .log import LOG


class StatusClassifier:
    """
    Exact-text rule matcher for status elements

    Attributes:
        rules: Rules tried in order; the first match wins
        status_class: Class marking status elements
    """

    def __init__(self, rules: Optional[Iterable[StatusRule]] = None,
                 status_class: Optional[str] = None) -> None:
        from ..config import appsettings

        self.rules: List[StatusRule] = list(DEFAULT_STATUS_RULES if rules is None else rules)
        self.status_class = status_class or appsettings.status_class

    def rule_match(self, text: str) -> Optional[StatusRule]:
        """
        Find the rule for a literal text

        Args:
            text: Element text; surrounding whitespace is ignored

        Returns:
            Matching rule or None
        """
        stripped = text.strip()
        for rule in self.rules:
            if rule.text == stripped:
                return rule
        return None

    def element_classify(self, element: Element) -> Optional[StatusRule]:
        """
        Tag one element if it is untagged and its first text node matches

        Returns:
            The rule applied, or None if the element was left alone
        """
        if any(element.class_has(rule.class_name) for rule in self.rules):
            return None

        node = element.firstTextNode_get()
        if node is None:
            return None

        rule = self.rule_match(node.text)
        if rule is not None:
            element.class_add(rule.class_name)
        return rule

    def statuses_apply(self, document: Document) -> int:
        """
        Classify every status element of document

        Returns:
            Number of elements tagged by this pass
        """
        tagged = 0
        for element in document.elements_findByClass(self.status_class):
            if self.element_classify(element) is not None:
                tagged += 1

        if tagged:
            LOG(f"Tagged {tagged} status element(s)", level=2)
        return tagged

    def statuses_watch(self, document: Document) -> Callable[[Element], object]:
        """
        Classify document now and again after every mutation

        Args:
            document: Parsed page to keep classified

        Returns:
            The registered observer; pass it to document.observer_remove() to stop
        """
        self.statuses_apply(document)

        def on_mutation(target: Element) -> None:
            self.statuses_apply(document)

        LOG("Watching document for status changes", level=3)
        return document.observer_add(on_mutation)


def statuses_apply(document: Document) -> int:
    """Run one classification pass with the default rules"""
    return StatusClassifier().statuses_apply(document)
