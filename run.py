from app import create_app #__init__.py toma el nombre de la carpeta que lo contiene.

app = create_app()

if __name__ == '__main__':
    app.run(
        host=app.config['FLASK_HOST'],
        port=app.config['FLASK_PORT'],
        debug=app.config['FLASK_DEBUG']
    )


'''
python run.py
    ↓
create_app() lee la configuración del entorno (STORAGE_BACKEND, ...)
    ↓
init_repositorio() crea el almacenamiento: memoria, archivo JSON o MySQL
    ↓
Se registran las rutas /api/usuarios (y el alias /api/users)
    ↓
app.run() arranca el servidor en el puerto 5000
    ↓
Usuario visita http://localhost:5000/api/usuarios
    ↓
Ruta -> ServicioUsuarios -> Repositorio -> respuesta JSON
'''
