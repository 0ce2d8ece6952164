"""HungerzHub data sync layer: cached access to tables, menu items and orders."""
