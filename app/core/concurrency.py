"""
Ejecución de tareas async con tope de concurrencia

Un pool fijo de workers comparte un índice "siguiente tarea". Cada worker
reclama el índice de forma síncrona (antes de su primer await), así que dos
workers nunca ven el mismo índice, y guarda el resultado en la posición de la
tarea: el orden de salida es siempre el orden de entrada.
"""

import asyncio
from typing import Awaitable, Callable, Sequence, TypeVar

T = TypeVar("T")


async def run_bounded(
    tasks: Sequence[Callable[[], Awaitable[T]]],
    limit: int
) -> list[T]:
    """
    Ejecuta las tareas con a lo sumo `limit` en vuelo al mismo tiempo.

    Args:
        tasks: Fábricas sin argumentos que devuelven un awaitable
        limit: Máximo de tareas concurrentes (>= 1)

    Returns:
        Resultados en el mismo orden que `tasks`

    Raises:
        ValueError: si limit < 1
        La primera excepción de una tarea, recién cuando todos los workers
        terminaron. No hay reintentos: cada tarea maneja sus propios errores.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    results: list = [None] * len(tasks)
    errors: list[Exception] = []
    next_index = 0

    async def worker() -> None:
        nonlocal next_index
        while next_index < len(tasks):
            index = next_index
            next_index += 1
            # Una tarea que falla no detiene al worker: sigue reclamando
            try:
                results[index] = await tasks[index]()
            except Exception as e:
                errors.append(e)

    worker_count = min(limit, len(tasks))
    await asyncio.gather(*(worker() for _ in range(worker_count)))

    if errors:
        raise errors[0]

    return results
