import os

from utils.schemas import Document


class DocumentReadError(RuntimeError):
    """
    Raised when a chapter file is present but cannot be read (permissions,
    a directory in its place, I/O failure) or when a document id points
    outside the documentation root. The result of a run cannot be trusted
    in that case, so it is not reported as a missing chapter.
    """


class DocumentLoader:
    """
    Reads chapter documents from a documentation root on disk.
    """

    def __init__(self, docs_root: str, extensions=('.md', '.mdx')):
        """
        Args:
            docs_root (str): Absolute path of the documentation tree.
            extensions (sequence): File suffixes tried, in order, for ids
                                   given without one (Docusaurus-style ids).
        """
        self.docs_root = os.path.abspath(docs_root)
        self.extensions = tuple(extensions)

    def _candidate_paths(self, doc_id: str) -> list[str]:
        base = os.path.abspath(os.path.join(self.docs_root, doc_id))
        if os.path.commonpath([self.docs_root, base]) != self.docs_root:
            raise DocumentReadError(f"Document id '{doc_id}' resolves outside {self.docs_root}")

        # Dots elsewhere in the id ("python3.10-setup") are part of its name.
        if os.path.splitext(doc_id)[1] in self.extensions:
            return [base]
        return [base + ext for ext in self.extensions]

    def load(self, doc_id: str) -> Document:
        """
        Returns the document for doc_id. A chapter that does not exist comes
        back with exists=False and empty text instead of raising.
        """
        for path in self._candidate_paths(doc_id):
            try:
                with open(path, 'r', encoding='utf-8', errors='replace') as f:
                    raw_text = f.read()
            except FileNotFoundError:
                continue
            except OSError as e:
                raise DocumentReadError(f"Could not read {path}: {e}") from e
            return Document(doc_id=doc_id, path=path, raw_text=raw_text, exists=True)

        return Document(doc_id=doc_id, path=None, raw_text="", exists=False)
