"""Tool modules. Each public module exposes a `TOOL` built with `toolkit.define`."""
