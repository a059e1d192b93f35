"""
Document processing pipeline for ingestion.

Chunking, PDF extraction, the per-document ingestion state machine and
the background worker pool that drives it. Import submodules directly;
this package keeps no eager imports so configuration can depend on the
chunking constants.
"""
