"""
Decides whether a document covers a concept.

Matching is a case-insensitive substring test on the whole text, so
"nodeless" counts as a mention of "node" and "coordinate ... frame" anywhere
in the text satisfies a rule requiring both words. Term order and proximity
are ignored.
"""
from utils.schemas import Concept, ConceptRule, Document


def _contains(haystack: str, term: str) -> bool:
    return term.casefold() in haystack


def evaluate_rule(rule: ConceptRule, text: str) -> bool:
    """True when every term group of the rule has at least one term in text."""
    if not text:
        return False
    folded = text.casefold()
    return all(
        any(_contains(folded, term) for term in group)
        for group in rule.all_of
    )


def evaluate(concept: Concept, document: Document) -> bool:
    return evaluate_rule(concept.rule, document.raw_text)
