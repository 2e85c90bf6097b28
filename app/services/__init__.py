"""
Services layer - business logic goes here, not in routes.

- storage: resource/user persistence (memory or Firestore)
- geo_filter: city scoping and map view filtering
- auth_service / session_store: admin login and sessions
"""
