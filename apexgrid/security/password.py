"""
Hachage des mots de passe (sel aléatoire + fonction adaptative).

werkzeug encode la méthode, les paramètres et le sel dans la chaîne produite,
ce qui permet de changer PASSWORD_HASH_METHOD sans invalider les anciens hash.
"""

from werkzeug.security import check_password_hash, generate_password_hash

from apexgrid.core.config import settings


def hash_password(password: str) -> str:
    return generate_password_hash(password, method=settings.PASSWORD_HASH_METHOD)


def verify_password(password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, password)
