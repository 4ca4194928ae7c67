from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_jwt_extended import JWTManager
from flask_mail import Mail
from flask_cors import CORS

# Shared extension instances, bound to the app in create_app()

db = SQLAlchemy()
bcrypt = Bcrypt()
jwt = JWTManager()
mail = Mail()
cors = CORS()

__all__ = [
    "db",
    "bcrypt",
    "jwt",
    "mail",
    "cors",
]
