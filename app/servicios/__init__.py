from app.servicios.usuarios import ServicioUsuarios

__all__ = ["ServicioUsuarios"]
