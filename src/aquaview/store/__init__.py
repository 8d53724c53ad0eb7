"""
aquaview.store — the fixture store and its contract with the UI.

## Public API
- FixtureStore — load/add/update/delete/list/get over an injected Storage.

## Usage
```python
from aquaview.io import Settings, open_storage
from aquaview.store import FixtureStore

store = FixtureStore.open(open_storage(Settings.load()))
store.add({"name": "Master Bathroom Sink", "type": "Bathroom Sink", "location": "Second Floor"})
```
"""

from __future__ import annotations

from .fixtures import FixtureStore

__all__ = ["FixtureStore"]
