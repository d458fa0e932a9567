"""
Queue Service Business Logic Package

Modules:
    - aggregation_service.py: End-to-end live store aggregation (StoreAggregationService)
    - fetch_orchestrator.py: Chunked, bounded-concurrency queue fetching
    - merge.py: Store-list + queue merge
    - classification.py: Response health classification
    - envelope.py: Response envelope construction
    - stats.py: Dashboard summary statistics

The service layer is independent of the API layer.
"""
