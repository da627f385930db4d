"""Option contracts viewer: proxy, decoding and selection pipeline."""
