"""
Services Layer
Use-case orchestration called by the routes: read rows, consult the business
policies, write, commit and log.

Services should:
- Keep the business rules in buisness/policies and only gather the facts they need
- Raise domain errors from buisness.errors instead of returning error values
- Return model instances; serialization is left to the presentation layer
"""
