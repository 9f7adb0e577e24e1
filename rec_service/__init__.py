"""
Recommendation service host: environment config, stores, app state, batch CLI.

Use: python -m rec_service.cli recommend <user_id>
Or:  from rec_service.state import get_state; await get_state().engine.compute_recommendations(uid)
"""
