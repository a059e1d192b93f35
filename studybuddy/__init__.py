"""StudyBuddy document ingestion and retrieval core."""
