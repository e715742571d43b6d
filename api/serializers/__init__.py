# Este archivo marca el directorio 'serializers' como un paquete Python.
# Los serializers se importan desde su módulo, p. ej.:
# from .clients import ClientSerializer
# from .tasks import TaskSerializer
