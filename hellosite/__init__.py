"""Server-rendered site with an embedded template registry and a relational data store."""
