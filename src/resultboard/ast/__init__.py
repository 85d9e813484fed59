"""SQL AST nodes and builder helpers."""
