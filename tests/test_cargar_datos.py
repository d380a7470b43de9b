import json
from pathlib import Path

from cargar_datos import cargar_usuarios

EJEMPLO = Path(__file__).resolve().parent.parent / "data" / "usuarios_ejemplo.json"


def test_carga_valida_y_cuenta(tmp_path, servicio):
    # el backend json del fixture ya usa tmp_path/usuarios.json
    archivo = tmp_path / "semilla.json"
    archivo.write_text(json.dumps([
        {"nombre": "Ana", "email": "ana@email.com", "edad": 28},
        {"nombre": "Luis", "email": "luis@email.com", "activo": False},
        {"nombre": "Ana bis", "email": "ANA@email.com"},
        {"nombre": "Sin email"},
        {"nombre": "Mayor", "email": "m@email.com", "edad": 200},
    ]), encoding="utf-8")

    resumen = cargar_usuarios(servicio, archivo)

    assert resumen == {"creados": 2, "duplicados": 1, "invalidos": 2}
    assert [u.email for u in servicio.listar()] == ["ana@email.com", "luis@email.com"]


def test_archivo_de_ejemplo_del_repo(servicio):
    resumen = cargar_usuarios(servicio, EJEMPLO)
    assert resumen["creados"] == 5
    assert resumen["duplicados"] == resumen["invalidos"] == 0
