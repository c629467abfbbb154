"""Change one value in a JSON document and keep everything else as written."""

from jsonsplice import apply_patch

original = """{
  // service settings
  "name": "api",
  "limits": {"rps": 100, "burst": 20}
}"""
document = '{"name": "api", "limits": {"rps": 100, "burst": 20}}'

result = apply_patch(original, document, ("limits",), '{"rps": 250}')

print("Strategy:", result.strategy)
print("Written value:", result.value)
print()
print(result.text)
