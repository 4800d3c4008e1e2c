"""chronotrack core -- errors, logging, settings, storage and locking primitives."""
