"""API Routes — bugs CRUD and health probes."""
