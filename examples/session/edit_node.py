"""Select a node, edit its scalar fields and save. The graph stays in sync."""

from jsonsplice import EditorContext, EditSession, JsonGraph, TextDocument

context = EditorContext(TextDocument(), JsonGraph())
context.load('{"customer": {"name": "Ada", "orders": [1, 2]}, "open": true}')

session = EditSession(context, context.graph.node_at(("customer",)))
print("Path:", session.display_path)
print("Editable text:")
print(session.display_text)
print()

session.start_editing()
session.update('{"name": "Ada Lovelace"}')
result = session.save()

print("Saved with:", result.strategy if result else session.error)
print("Unsaved changes:", context.document.has_changes)
print("Orders kept:", context.graph.value["customer"]["orders"])
print()
print(context.document.get_text())
