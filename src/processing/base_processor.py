from abc import ABC, abstractmethod
from tqdm import tqdm

class BaseProcessor(ABC):
    """
    Abstract base class for a sequential processing step.
    Handles loading the work items, iterating over them in order and
    collecting one result per item. Items are processed one at a time;
    an exception raised by _process_item aborts the whole run.
    """
    def __init__(self, cfg_manager):
        self.cfg_manager = cfg_manager
        self.config = cfg_manager.config

    # --- Abstract methods for subclasses to implement ---
    @abstractmethod
    def _load_items(self) -> list:
        """Return the items to process, in the order they must be reported."""
        pass

    @abstractmethod
    def _process_item(self, item):
        """
        Perform the core processing logic on a single item and return its result.
        """
        pass

    @abstractmethod
    def _build_result(self, results: list):
        """Combine the per-item results into the value returned by run_pipeline."""
        pass

    def _show_progress(self) -> bool:
        return False

    # --- Concrete methods provided by the base class ---
    def run_pipeline(self):
        """Executes the full, generic processing pipeline."""
        items = self._load_items()

        results = []
        for item in tqdm(items, desc=f"Processing ({self.__class__.__name__})", disable=not self._show_progress()):
            results.append(self._process_item(item))

        return self._build_result(results)
