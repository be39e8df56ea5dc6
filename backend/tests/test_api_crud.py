"""
Tests for the CRUD endpoints

BIs and bases, automations, canvas and the task board, over the memory store.
"""
API_PREFIX = "/api"


def create_bi(client, bases=2):
    payload = {
        "nome": "Painel SLA",
        "dataInicio": "2024-01-01",
        "dataFinal": "2024-03-01",
        "responsavel": "Ana",
        "operacao": "Service Desk",
        "bases": [
            {"nomeFerramenta": f"Tool {i}", "pastaOrigem": f"/data/{i}", "temApi": i == 0}
            for i in range(bases)
        ],
    }
    response = client.post(f"{API_PREFIX}/bis", json=payload)
    assert response.status_code == 201
    return response.json()


class TestBiEndpoints:

    def test_create_and_list(self, client):
        bi = create_bi(client)
        assert bi["status"] == "em_aberto"
        assert bi["inativo"] is False
        assert bi["bases"][0]["temApi"] is True
        assert bi["bases"][0]["biId"] == bi["id"]
        listed = client.get(f"{API_PREFIX}/bis").json()
        assert [b["id"] for b in listed] == [bi["id"]]

    def test_patch_and_inativar(self, client):
        bi = create_bi(client)
        patched = client.patch(f"{API_PREFIX}/bis/{bi['id']}", json={"nome": "Novo"}).json()
        assert patched["nome"] == "Novo"
        assert patched["responsavel"] == "Ana"
        inativo = client.patch(f"{API_PREFIX}/bis/{bi['id']}/inativar", json={"inativo": True}).json()
        assert inativo["inativo"] is True

    def test_base_status_completes_bi(self, client):
        bi = create_bi(client)
        first, second = (b["id"] for b in bi["bases"])
        body = client.patch(
            f"{API_PREFIX}/bases/{first}/status",
            json={"status": "concluido", "biId": bi["id"]}
        ).json()
        assert body["status"] == "em_aberto"
        body = client.patch(
            f"{API_PREFIX}/bases/{second}/status",
            json={"status": "concluido", "observacao": "ok"}
        ).json()
        assert body["status"] == "concluido"
        assert body["bases"][1]["observacao"] == "ok"

    def test_invalid_base_status(self, client):
        bi = create_bi(client)
        response = client.patch(
            f"{API_PREFIX}/bases/{bi['bases'][0]['id']}/status", json={"status": "done"}
        )
        assert response.status_code == 400

    def test_delete_and_not_found(self, client):
        bi = create_bi(client)
        response = client.delete(f"{API_PREFIX}/bis/{bi['id']}")
        assert response.status_code == 204
        assert response.content == b""
        response = client.get(f"{API_PREFIX}/bis/{bi['id']}")
        assert response.status_code == 404
        assert response.json()["error"] == "BI not found"
        assert response.json()["code"] == "BI_NOT_FOUND"

    def test_method_not_allowed(self, client):
        assert client.put(f"{API_PREFIX}/bis").status_code == 405


class TestAutomationEndpoints:

    def test_crud(self, client):
        created = client.post(f"{API_PREFIX}/automacoes", json={
            "nomeIntegracao": "Extração",
            "recorrencia": "Semanal",
            "dataHora": "2024-01-01T06:00",
            "nomeExecutavel": "run.exe",
            "pastaFimAtualizacao": "/out",
        })
        assert created.status_code == 201
        automation = created.json()
        assert automation["repetirUmaHora"] is False

        patched = client.patch(
            f"{API_PREFIX}/automacoes/{automation['id']}", json={"repetirUmaHora": True}
        ).json()
        assert patched["repetirUmaHora"] is True

        assert client.delete(f"{API_PREFIX}/automacoes/{automation['id']}").status_code == 204
        assert client.get(f"{API_PREFIX}/automacoes/{automation['id']}").status_code == 404

    def test_unknown_recorrencia(self, client):
        response = client.post(f"{API_PREFIX}/automacoes", json={
            "nomeIntegracao": "x",
            "recorrencia": "Anual",
            "dataHora": "2024-01-01T06:00",
            "nomeExecutavel": "run.exe",
            "pastaFimAtualizacao": "/out",
        })
        assert response.status_code == 400


class TestCanvasEndpoints:

    def test_save_and_load(self, client):
        assert client.get(f"{API_PREFIX}/canvas").json() == {"nodes": [], "edges": []}
        payload = {
            "nodes": [{"id": "n1", "positionX": 10, "positionY": 20, "data": {"label": "GLPI"}}],
            "edges": [{"id": "e1", "source": "n1", "target": "n1"}],
        }
        assert client.post(f"{API_PREFIX}/canvas", json=payload).status_code == 200
        canvas = client.get(f"{API_PREFIX}/canvas").json()
        assert canvas["nodes"][0]["type"] == "default"
        assert canvas["nodes"][0]["positionX"] == 10
        assert canvas["edges"][0]["type"] == "smoothstep"

    def test_duplicate_node_ids(self, client):
        node = {"id": "n1", "positionX": 0, "positionY": 0}
        response = client.post(f"{API_PREFIX}/canvas", json={"nodes": [node, node], "edges": []})
        assert response.status_code == 400
        assert response.json()["details"]["nodes"] == ["n1"]


class TestTaskEndpoints:

    def task_payload(self, **fields):
        payload = {
            "titulo": "Conferir carga",
            "inicio": "08:00",
            "fim": "09:00",
            "responsavel": "Ana",
            "operacao": "Service Desk",
            "ymd": "2024-01-01",
            "workspaceId": "ws1",
        }
        payload.update(fields)
        return payload

    def test_create_weekly_and_delete_series(self, client):
        response = client.post(f"{API_PREFIX}/tasks", json=self.task_payload(recKind="weekly", weekDay=4))
        assert response.status_code == 201
        tasks = response.json()
        assert len(tasks) == 8
        assert tasks[0]["ymd"] == "2024-01-05"
        series_id = tasks[0]["seriesId"]

        deleted = client.delete(f"{API_PREFIX}/tasks/series/{series_id}", params={"workspace": "ws1"})
        assert deleted.json() == {"deleted": 8}
        again = client.delete(f"{API_PREFIX}/tasks/series/{series_id}", params={"workspace": "ws1"})
        assert again.status_code == 404

    def test_bad_clock_time(self, client):
        response = client.post(f"{API_PREFIX}/tasks", json=self.task_payload(inicio="8h"))
        assert response.status_code == 400

    def test_impossible_calendar_day(self, client):
        response = client.post(
            f"{API_PREFIX}/tasks", json=self.task_payload(ymd="2024-02-30", recKind="daily")
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

        response = client.get(f"{API_PREFIX}/tasks/summary", params={"workspace": "ws1", "ymd": "2024-02-30"})
        assert response.status_code == 400

    def test_clock_out_of_range(self, client):
        response = client.post(f"{API_PREFIX}/tasks", json=self.task_payload(inicio="25:99"))
        assert response.status_code == 400
        task = client.post(f"{API_PREFIX}/tasks", json=self.task_payload()).json()[0]
        response = client.patch(f"{API_PREFIX}/tasks/{task['id']}", json={"fim": "24:00"})
        assert response.status_code == 400

    def test_list_patch_summary(self, client):
        created = client.post(f"{API_PREFIX}/tasks", json=self.task_payload()).json()[0]
        client.post(f"{API_PREFIX}/tasks", json=self.task_payload(responsavel="Bruno", inicio="07:00"))

        listed = client.get(f"{API_PREFIX}/tasks", params={"workspace": "ws1", "ymd": "2024-01-01"}).json()
        assert [t["responsavel"] for t in listed] == ["Bruno", "Ana"]

        patched = client.patch(f"{API_PREFIX}/tasks/{created['id']}", json={"concluida": True}).json()
        assert patched["concluida"] is True

        summary = client.get(
            f"{API_PREFIX}/tasks/summary", params={"workspace": "ws1", "ymd": "2024-01-01"}
        ).json()
        assert summary["total"] == 2
        assert summary["concluida"] == 1
        # 2024-01-01 is in the past, so the open task is late
        assert summary["atrasada"] == 1
        assert summary["noPrazo"] == 0
        assert summary["porResponsavel"] == [
            {"responsavel": "Ana", "count": 1},
            {"responsavel": "Bruno", "count": 1},
        ]

    def test_clear_and_delete(self, client):
        task = client.post(f"{API_PREFIX}/tasks", json=self.task_payload()).json()[0]
        assert client.delete(f"{API_PREFIX}/tasks/{task['id']}").status_code == 204
        assert client.get(f"{API_PREFIX}/tasks/{task['id']}").status_code == 404
        client.post(f"{API_PREFIX}/tasks", json=self.task_payload(recKind="daily"))
        assert client.delete(f"{API_PREFIX}/tasks", params={"workspace": "ws1"}).json() == {"deleted": 30}
