"""
aquaview — household water-fixture store and usage datasets.

## Layers
- core — fixture schema, domain errors, serde, defaults (zero-IO).
- io — Settings, durable Storage backends, storage-layer errors.
- store — FixtureStore (the CRUD contract consumed by the dashboard).
- usage — read-only Polars transforms over the usage CSVs.
- cli — `aquaview` console script.

The Streamlit dashboard lives in the separate top-level `app` package.
"""
