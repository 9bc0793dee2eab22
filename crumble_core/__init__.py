"""Drawing-surface primitives shared by crumble charts."""
