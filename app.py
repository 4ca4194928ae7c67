from cyberguard import create_app

app = create_app()

# ▶️ Run app
if __name__ == '__main__':
    app.run(debug=app.config.get('DEBUG', False))
