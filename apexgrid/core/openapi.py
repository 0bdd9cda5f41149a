"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec
les conventions des pages (formulaires, champ `action`, redirections).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "ApexGrid : écuries, voitures, pilotes et leurs statistiques.\n\n"
            "### Conventions\n"
            "- Les POST sont en `application/x-www-form-urlencoded` avec un champ `action` "
            "(`create_team`, `delete_team`, `create_car`, `delete_car`, `create_driver`, "
            "`delete_driver`, `update_driver_stats`, `update_car_stats`).\n"
            "- Succès : redirection 303 vers la page d'origine + message flash à usage unique.\n"
            "- Échec : la page est renvoyée avec la liste `errors`.\n"
            "- Authentification : cookie de session httpOnly.\n"
            "- Toutes les heures sont en UTC.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
