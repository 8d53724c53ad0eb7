"""
Core contracts for aquaview (fixture schema, domain errors, serde, defaults).

## Contracts (single source of truth)
- Schema — FixtureType enumeration, FixtureFields payload, Fixture record.
- Errors — ValidationError, NotFoundError.
- Serde — JSON policy for persisted documents.
- Constants — default storage key and directories.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- aquaview.io and aquaview.store build on these; nothing here imports them.

## Examples
```python
from aquaview.core.schema import FixtureFields, parse_fields
fields = parse_fields({"name": "Sink", "type": "Kitchen Sink", "location": "Kitchen"})
fields.type.value  # 'Kitchen Sink'
```
"""
