# core/json_payloads.py

# ----- Skills -----
SKILLS_SCHEMA = {
    "type": "array",
    "items": {"type": "string", "minLength": 1, "maxLength": 64, "pattern": r"\S"},
    "maxItems": 50,
}

# skills offered when creating a project
AVAILABLE_SKILLS = [
    "React", "Node.js", "Python", "TypeScript", "JavaScript", "Java",
    "Go", "Docker", "Kubernetes", "AWS", "MongoDB", "PostgreSQL",
    "GraphQL", "Machine Learning", "DevOps",
]

SKILLS_TEMPLATE = {
    "version": 1,
    "schema": SKILLS_SCHEMA,
    "templates": {"available": AVAILABLE_SKILLS},
}
