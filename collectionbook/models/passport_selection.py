"""
Selection handling for the passport (wallet) example.

Only one pass can be open at a time. Tapping any pass while one is open
closes it instead of opening the tapped one.
"""
import traceback
from typing import Callable, List, Optional

from collectionbook.layouts.index import ItemIndex

SelectionCallback = Callable[[Optional[ItemIndex]], None]


class PassportSelection:
    """Tracks the open pass and forwards changes to the layout."""

    def __init__(self, layout=None, data_source=None) -> None:
        """
        Args:
            layout: Layout receiving `on_selection_changed`, if any
            data_source: SectionModel mirroring the selection, if any
        """
        self._layout = layout
        self._data_source = data_source
        self._selection: Optional[ItemIndex] = None
        self._callbacks: List[SelectionCallback] = []

    @property
    def selection(self) -> Optional[ItemIndex]:
        return self._selection

    def register_callback(self, callback: SelectionCallback) -> None:
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unregister_callback(self, callback: SelectionCallback) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def tap(self, index: ItemIndex) -> Optional[ItemIndex]:
        """
        Handle a tap on a pass.

        Args:
            index: The tapped pass

        Returns:
            The selection after the tap
        """
        if self._selection is None:
            self._set_selection(index)
        else:
            # Close the open pass; the tapped one is not selected
            self._set_selection(None)
        return self._selection

    def clear(self) -> bool:
        if self._selection is None:
            return False
        self._set_selection(None)
        return True

    def _set_selection(self, selection: Optional[ItemIndex]) -> None:
        self._selection = selection
        if self._data_source is not None:
            self._data_source.set_selection(selection)
        if self._layout is not None:
            self._layout.on_selection_changed(selection)

        for callback in self._callbacks:
            try:
                callback(selection)
            except Exception:
                # A broken listener must not undo the layout change
                traceback.print_exc()
