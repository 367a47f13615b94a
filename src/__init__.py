"""incidentsync: incident document extraction and report sheet sync."""
