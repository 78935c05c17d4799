# src/passenger_config/core/__init__.py
"""
Core do Passenger Config.

Este pacote contém a implementação canônica do motor de resolução de
configuração, independente do servidor hospedeiro que o invoca.

O core é projetado para ser:
    - determinístico
    - síncrono e single-threaded (executa apenas na fase de carga)
    - testável de forma isolada
    - orientado a registros explícitos, sem lookup global

Componentes principais:
    - scope      → tri-state, registros de diretório e servidor, pool de vida útil
    - directives → registry declarativo de diretivas e setters com validação
    - cascade    → merge de diretório, merge de servidor, normalização entre servidores
    - config     → carregamento, deep-merge e hashing de documentos de host
    - engine     → planejamento de locations e orquestração do ciclo de carga

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo comportamento é explícito e testado
    - "Não definido" nunca vaza para o registro efetivo consumido downstream
    - Falhas de validação abortam a carga da configuração

Limites explícitos:
    - Não interpreta sintaxe de arquivos de configuração do servidor
    - Não gerencia pools de processos nem requisições
"""
