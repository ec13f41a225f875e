"""
Exceções canônicas da camada de configuração do Atlas BuildPlan.

Todas as falhas de carregamento, merge ou validação de valores da
configuração do planner herdam de `ConfigError`, permitindo que a CLI
as capture de forma genérica e as diferencie de erros de catálogo ou
de discovery.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa erro de catálogo ou de planejamento
"""


class ConfigError(Exception):
    """Exceção base para erros relacionados à configuração do planner."""


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    Decisões arquiteturais:
        - O arquivo de defaults é obrigatório quando um caminho é informado
        - Não há criação implícita de defaults em disco
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class ConfigParseError(ConfigError):
    """
    Arquivo de configuração ilegível: YAML/JSON malformado ou bytes
    que não são UTF-8.
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"planner": {"fail_on_degraded": false}}
        - override: {"planner": "strict"}
    """


class InvalidConfigValueError(ConfigError):
    """
    Valor de configuração fora do domínio aceito pelo planner.

    Exemplos:
        - planner.cycle_policy diferente de "exclude" / "fail"
        - discovery.descriptor_file vazio ou contendo separador de caminho
    """
