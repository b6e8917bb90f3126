"""
Services

Local-store side:
- keyed_store / blob_store: KeyedStore over memory, file or Redis backends
- entity_service: typed CRUD base class
- *_service: one module per business area
- relationship_service: cross-entity summaries for linking
- local_services: wiring of all of the above

API side:
- file_storage: S3 uploads
"""
