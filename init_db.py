from cyberguard import create_app
from cyberguard.bootstrap import seed
from cyberguard.database import get_store

app = create_app()

# Tables are created by create_app(); this adds the default admin and sample events.
with app.app_context():
    seed(get_store())
    print("✅ Database initialized with tables and seed data.")
