import os
import yaml

from utils.schemas import ChapterSpec

def _normalize_rule(concept: dict) -> dict:
    """
    Converts the authoring shorthands of a registry entry into a rule in
    conjunctive normal form. Exactly one of these keys is expected:

        term: node                 -> [["node"]]
        any_of: [ai, agent]        -> [["ai", "agent"]]
        all_of: [coordinate, frame] or [[urdf], [purpose, role]]
    """
    shapes = [key for key in ('term', 'any_of', 'all_of') if key in concept]
    if len(shapes) != 1:
        raise ValueError(
            f"Concept '{concept.get('name', '?')}' must define exactly one of term/any_of/all_of, got {shapes or 'none'}."
        )
    shape = shapes[0]
    value = concept[shape]

    if shape != 'term' and not isinstance(value, list):
        raise ValueError(f"Concept '{concept.get('name', '?')}': '{shape}' must be a list of terms.")

    if shape == 'term':
        groups = [[value]]
    elif shape == 'any_of':
        groups = [list(value)]
    else:
        groups = []
        for item in value:
            # Plain strings in all_of are single-term groups.
            if isinstance(item, str):
                groups.append([item])
            elif isinstance(item, list):
                groups.append(list(item))
            else:
                raise ValueError(
                    f"Concept '{concept.get('name', '?')}': all_of items must be terms or lists of terms, got {item!r}."
                )
    return {'all_of': groups}


def _chapter_concepts(entry: dict) -> list:
    concepts = entry.get('concepts') or []
    if not isinstance(concepts, list):
        raise ValueError(f"Chapter '{entry.get('id', '?')}': 'concepts' must be a list.")

    normalized = []
    for concept in concepts:
        if not isinstance(concept, dict):
            raise ValueError(f"Chapter '{entry.get('id', '?')}': each concept must be a mapping, got {concept!r}.")
        normalized.append({
            'name': concept.get('name'),
            'rule': _normalize_rule(concept),
            'required': concept.get('required', True),
        })
    return normalized


def parse_chapter_specs(raw: dict) -> list:
    """
    Builds ChapterSpec objects from the parsed registry document, keeping
    the declared order of chapters and of concepts within a chapter.

    Args:
        raw (dict): The registry, expected to contain a 'chapters' list.

    Returns:
        list: ChapterSpec objects in declaration order.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get('chapters'), list) or not raw['chapters']:
        raise ValueError("Chapter registry must contain a non-empty 'chapters' list.")

    specs = []
    seen_ids = set()
    for entry in raw['chapters']:
        if not isinstance(entry, dict):
            raise ValueError(f"Each chapter must be a mapping with 'id' and 'concepts', got {entry!r}.")
        spec = ChapterSpec.model_validate({
            'doc_id': entry.get('id'),
            'title': entry.get('title', ''),
            'concepts': _chapter_concepts(entry),
        })
        if spec.doc_id in seen_ids:
            raise ValueError(f"Chapter '{spec.doc_id}' is declared more than once.")
        seen_ids.add(spec.doc_id)
        specs.append(spec)
    return specs


def load_chapter_specs(registry_path: str) -> list:
    """Reads the YAML chapter registry at registry_path."""
    if not os.path.exists(registry_path):
        raise ValueError(f"Chapter registry not found: {registry_path}")

    print(f"Loading chapter registry from {registry_path}...")
    with open(registry_path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f)
    specs = parse_chapter_specs(raw)
    print(f"Found {len(specs)} chapters to validate.")
    return specs


def select_chapters(specs: list, chapter_ids) -> list:
    """
    Keeps only the chapters named in chapter_ids, preserving registry order.
    An empty or None filter keeps every chapter.
    """
    if not chapter_ids:
        return list(specs)
    known = {spec.doc_id for spec in specs}
    unknown = [cid for cid in chapter_ids if cid not in known]
    if unknown:
        raise ValueError(f"Unknown chapter(s) requested: {', '.join(unknown)}")
    wanted = set(chapter_ids)
    return [spec for spec in specs if spec.doc_id in wanted]
