"""User interfaces for cardsmith."""
