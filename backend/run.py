from reflected import create_app

app = create_app()


if __name__ == "__main__":
    port = app.config["PORT"]
    app.logger.info("Reflected running at http://localhost:%s", port)
    app.run(port=port, debug=app.config.get("DEBUG", False))
