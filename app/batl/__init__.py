"""batl - The multi-repo development tool.

Battalion organizes codebases into repositories and workspaces, addressed
by slash-separated resource names and described by a versioned batl.toml.
"""

__version__ = "0.2.2"
