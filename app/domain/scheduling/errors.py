"""Erros do domínio de agendamento de aulas.

Violações de regra de negócio (janela de horário, carga horária) NÃO usam
exceções: viram um `Rejected`. Estas classes cobrem apenas o que impede a
validação de acontecer.
"""


class SchedulingError(Exception):
    """Erro genérico da camada de agendamento."""


class InvalidTimeFormatError(SchedulingError, ValueError):
    """Hora informada não está no formato HH:MM (24h)."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Hora inválida: {value!r} (use HH:MM)")
        self.value = value


class UnknownUnitError(SchedulingError):
    """A UC consultada não existe; a capacidade fica indeterminada."""

    def __init__(self, iduc: object) -> None:
        super().__init__(f"Unidade curricular não encontrada: {iduc}")
        self.iduc = iduc


class LookupFailureError(SchedulingError):
    """Falha de rede/banco ao consultar o armazenamento."""
