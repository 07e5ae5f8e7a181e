"""
Testes das rotas /api/processos
"""
from unittest.mock import MagicMock

import pytest
from bson.decimal128 import Decimal128
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from faturamento_api.database import MongoDatabase
from faturamento_api.main import app


class TestListagem:

    def test_lista_todos_dos_mais_recentes(self, client, processos):
        resposta = client.get("/api/processos")

        assert resposta.status_code == 200
        corpo = resposta.json()
        assert corpo["meta"] == {"total": 5, "page": 1, "limit": 20, "totalPages": 1}
        assert [p["nup"] for p in corpo["data"]] == ["00005", "00004", "00003", "00002", "00001"]
        assert isinstance(corpo["data"][0]["_id"], str)

    def test_busca_em_numero_e_credenciado(self, client, processos):
        resposta = client.get("/api/processos", params={"search": "CLINICA"})
        assert {p["nup"] for p in resposta.json()["data"]} == {"00001", "00004"}

        resposta = client.get("/api/processos", params={"search": "2024.0003"})
        assert [p["nup"] for p in resposta.json()["data"]] == ["00003"]

    def test_busca_literal(self, client, processos):
        resposta = client.get("/api/processos", params={"search": "2024.000."})
        assert resposta.json()["meta"]["total"] == 0

    def test_filtros_combinados(self, client, processos):
        resposta = client.get(
            "/api/processos",
            params={"tratamento": "odonto", "responsavel": "Ana"}
        )
        assert [p["nup"] for p in resposta.json()["data"]] == ["00001"]

        resposta = client.get("/api/processos", params={"status": "assinado e tramitado"})
        assert {p["nup"] for p in resposta.json()["data"]} == {"00002", "00003"}

    def test_paginacao(self, client, processos):
        resposta = client.get("/api/processos", params={"page": "2", "limit": "2"})
        corpo = resposta.json()

        assert corpo["meta"] == {"total": 5, "page": 2, "limit": 2, "totalPages": 3}
        assert [p["nup"] for p in corpo["data"]] == ["00003", "00002"]

        ultima = client.get("/api/processos", params={"page": "3", "limit": "2"}).json()
        assert len(ultima["data"]) == 1
        alem = client.get("/api/processos", params={"page": "4", "limit": "2"}).json()
        assert alem["data"] == []
        assert alem["meta"]["total"] == 5

    def test_paginacao_invalida_usa_padrao(self, client, processos):
        corpo = client.get("/api/processos", params={"page": "abc", "limit": "0"}).json()
        assert corpo["meta"]["page"] == 1
        assert corpo["meta"]["limit"] == 20


class TestAtualizacaoStatus:

    def test_atualiza_status_e_historico(self, client, colecao, processos):
        resposta = client.put("/api/processos/00001", json={
            "novoStatus": "assinado e tramitado",
            "usuarioEmail": "ana@exemplo.com",
            "usuarioNome": "Ana",
        })

        assert resposta.status_code == 200
        assert resposta.json() == {"success": True, "message": "Status atualizado com sucesso!"}

        doc = colecao.find_one({"nup": "00001"})
        assert doc["status"] == "assinado e tramitado"
        assert "ultimaAtualizacao" in doc
        assert len(doc["historicoStatus"]) == 1
        entrada = doc["historicoStatus"][0]
        assert entrada["de"] == "Sem status"
        assert entrada["para"] == "assinado e tramitado"
        assert entrada["usuario"] == "ana@exemplo.com"
        assert entrada["responsavel"] == "Ana"
        assert "data" in entrada

    def test_cada_chamada_acrescenta_uma_entrada(self, client, colecao, processos):
        client.put("/api/processos/00001", json={
            "novoStatus": "pendente", "usuarioEmail": "a@x.com", "statusAnterior": "em analise",
        })
        client.put("/api/processos/00001", json={
            "novoStatus": "pendente", "usuarioEmail": "a@x.com", "statusAnterior": "pendente",
        })

        historico = colecao.find_one({"nup": "00001"})["historicoStatus"]
        assert [(h["de"], h["para"]) for h in historico] == [
            ("em analise", "pendente"),
            ("pendente", "pendente"),
        ]

    def test_atualiza_valores(self, client, colecao, processos):
        resposta = client.put("/api/processos/00002", json={
            "novoStatus": "pendente",
            "usuarioEmail": "a@x.com",
            "valorCapa": "1.500,00",
            "valorGlosa": 10,
        })

        assert resposta.status_code == 200
        doc = colecao.find_one({"nup": "00002"})
        assert doc["valorCapa"] == 1500.0
        assert doc["valorGlosa"] == 10
        assert "valorLiberado" not in doc

    def test_valor_invalido(self, client, colecao, processos):
        resposta = client.put("/api/processos/00002", json={
            "novoStatus": "pendente", "usuarioEmail": "a@x.com", "valorCapa": "abc",
        })

        assert resposta.status_code == 400
        assert "error" in resposta.json()
        assert colecao.find_one({"nup": "00002"})["status"] == "assinado e tramitado"

    @pytest.mark.parametrize("corpo", [
        {"usuarioEmail": "a@x.com"},
        {"novoStatus": "pendente"},
        {"novoStatus": "", "usuarioEmail": "a@x.com"},
        {},
    ])
    def test_dados_incompletos(self, client, colecao, processos, corpo):
        resposta = client.put("/api/processos/00001", json=corpo)

        assert resposta.status_code == 400
        assert resposta.json() == {"error": "Dados incompletos"}
        assert "historicoStatus" not in colecao.find_one({"nup": "00001"})

    def test_processo_inexistente(self, client, colecao, processos):
        resposta = client.put("/api/processos/99999", json={
            "novoStatus": "pendente", "usuarioEmail": "a@x.com",
        })

        assert resposta.status_code == 404
        assert resposta.json() == {"error": "Processo não encontrado"}
        assert colecao.count_documents({"nup": "99999"}) == 0
        assert colecao.count_documents({"historicoStatus": {"$exists": True}}) == 0


class TestAtribuicaoColaborador:

    def test_atribui(self, client, colecao, processos):
        resposta = client.put("/api/processos/00003/colaborador", json={
            "novoColaborador": "Carlos", "usuarioEmail": "bruno@x.com",
        })

        assert resposta.status_code == 200
        assert resposta.json()["success"] is True
        doc = colecao.find_one({"nup": "00003"})
        assert doc["colaborador"] == "Carlos"
        assert doc["atribuidoPor"] == "bruno@x.com"
        assert "dataAtribuicao" in doc

    def test_sem_colaborador(self, client, processos):
        resposta = client.put("/api/processos/00003/colaborador", json={"usuarioEmail": "b@x.com"})

        assert resposta.status_code == 400
        assert resposta.json() == {"error": "Nome do colaborador é obrigatório"}

    def test_processo_inexistente(self, client, processos):
        resposta = client.put("/api/processos/99999/colaborador", json={"novoColaborador": "Carlos"})
        assert resposta.status_code == 404


class TestBancoIndisponivel:

    @pytest.fixture
    def client_sem_banco(self, cache_desligado):
        mongo_client = MagicMock()
        mongo_client.admin.command.side_effect = ServerSelectionTimeoutError("sem servidor")
        mongo = MongoDatabase(client=mongo_client)
        mongo.conectar()

        app.state.mongo = mongo
        app.state.cache = cache_desligado
        return TestClient(app)

    @pytest.mark.parametrize("metodo, url, corpo", [
        ("get", "/api/processos", None),
        ("get", "/api/dashboard/resumo", None),
        ("put", "/api/processos/00001", {"novoStatus": "x", "usuarioEmail": "a@x.com"}),
        ("put", "/api/processos/00001/colaborador", {"novoColaborador": "Carlos"}),
    ])
    def test_responde_503(self, client_sem_banco, metodo, url, corpo):
        resposta = client_sem_banco.request(metodo.upper(), url, json=corpo)

        assert resposta.status_code == 503
        assert resposta.json() == {"error": "Banco de dados indisponível"}

    def test_health_informa_desconectado(self, client_sem_banco):
        corpo = client_sem_banco.get("/api/health").json()
        assert corpo["status"] == "online"
        assert corpo["db"] == "disconnected"


class TestValoresDecimal128:

    def test_listagem_serializa_decimal128(self, client, colecao):
        colecao.insert_one({
            "nup": "D1",
            "responsavel": "Ana",
            "valorCapa": Decimal128("10.25"),
            "valorGlosa": Decimal128("0.50"),
        })

        resposta = client.get("/api/processos")

        assert resposta.status_code == 200
        processo = resposta.json()["data"][0]
        assert processo["valorCapa"] == 10.25
        assert processo["valorGlosa"] == 0.5


class TestErroDoBanco:

    def test_listagem(self, client_colecao_com_erro):
        resposta = client_colecao_com_erro.get("/api/processos")

        assert resposta.status_code == 500
        assert resposta.json() == {"error": "Erro interno ao buscar processos"}

    def test_atualizacao_de_status(self, client_colecao_com_erro):
        resposta = client_colecao_com_erro.put("/api/processos/00001", json={
            "novoStatus": "pendente", "usuarioEmail": "a@x.com",
        })

        assert resposta.status_code == 500
        assert resposta.json() == {"error": "Erro ao atualizar processo"}

    def test_atribuicao_de_colaborador(self, client_colecao_com_erro):
        resposta = client_colecao_com_erro.put(
            "/api/processos/00001/colaborador", json={"novoColaborador": "Carlos"}
        )

        assert resposta.status_code == 500
        assert resposta.json() == {"error": "Erro ao atualizar colaborador"}
