from app.routers import dashboard, incidents, meetings, print_views, protocols, settings, structure
