"""
Application Layer

Contains the command model, the playback controller and read-side queries.
This layer orchestrates domain objects and infrastructure ports.

Structure:
- commands/: the uniform command model and per-surface parsers
- queries/: read operations (GetQueueQuery, GetNowPlayingQuery)
- services/: PlaybackController, SearchService and CommandDispatcher
- interfaces/: Port interfaces for infrastructure adapters
"""
