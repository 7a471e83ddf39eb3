"""
Modelo de Categoria.

Localização: finance/models/categoria_model.py

Schema no MongoDB (collection 'categories'):
{
  _id: ObjectId,
  code: String,             # Código legível único (ex.: 'ALUGUEL')
  name: String,             # Nome exibido nos relatórios
  description: String,      # Descrição (opcional)
  created_at: ISODate,
  updated_at: ISODate
}
"""
from typing import Dict, Any, List, Optional

from finance.models.fields import required_text, optional_text, timestamps


class CategoriaModel:
    """
    Modelo de dados para categorias de lançamentos.
    """

    @staticmethod
    def create_categoria_data(payload: Dict[str, Any],
                              existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Cria estrutura de dados de categoria.

        Args:
            payload: Dados recebidos (code, name, description)
            existing: Documento atual, em caso de atualização

        Returns:
            Dict com dados da categoria

        Raises:
            ValueError: Se código ou nome ausentes
        """
        return {
            'code': required_text(payload, 'code', 'Código da categoria').upper(),
            'name': required_text(payload, 'name', 'Nome da categoria'),
            'description': optional_text(payload, 'description'),
            **timestamps(existing),
        }

    @staticmethod
    def get_categorias_predefinidas() -> List[Dict[str, str]]:
        """
        Retorna categorias pré-definidas usadas na carga inicial.

        Returns:
            Lista de dicts com code, name e description
        """
        return [
            # Receitas
            {'code': 'SALARIO', 'name': 'Salário', 'description': 'Recebimento de salário'},
            {'code': 'FREELA', 'name': 'Freelance', 'description': 'Trabalhos autônomos'},
            {'code': 'INVEST', 'name': 'Investimentos', 'description': 'Rendimentos de investimentos'},
            {'code': 'BONUS', 'name': 'Bônus', 'description': 'Bônus e comissões'},
            # Moradia e contas
            {'code': 'ALUGUEL', 'name': 'Aluguel', 'description': 'Pagamento de aluguel'},
            {'code': 'CONDOM', 'name': 'Condomínio', 'description': 'Taxa de condomínio'},
            {'code': 'ENERGIA', 'name': 'Energia Elétrica', 'description': 'Conta de luz'},
            {'code': 'AGUA', 'name': 'Água', 'description': 'Conta de água'},
            {'code': 'GAS', 'name': 'Gás', 'description': 'Botijão de gás'},
            {'code': 'INTERNET', 'name': 'Internet', 'description': 'Provedor de internet'},
            {'code': 'CELULAR', 'name': 'Celular', 'description': 'Plano de celular'},
            {'code': 'TV', 'name': 'TV por Assinatura', 'description': 'Streaming e TV a cabo'},
            # Alimentação
            {'code': 'MERCADO', 'name': 'Supermercado', 'description': 'Compras do mês'},
            {'code': 'IFOOD', 'name': 'Delivery', 'description': 'Pedidos por aplicativo'},
            {'code': 'RESTAUR', 'name': 'Restaurante', 'description': 'Refeições fora'},
            # Transporte
            {'code': 'COMBUST', 'name': 'Combustível', 'description': 'Gasolina, álcool, diesel'},
            {'code': 'UBER', 'name': 'Uber/Táxi', 'description': 'Transporte por aplicativo'},
            {'code': 'ONIBUS', 'name': 'Ônibus/Metrô', 'description': 'Transporte público'},
            {'code': 'ESTACION', 'name': 'Estacionamento', 'description': 'Estacionamento'},
            # Saúde
            {'code': 'PLANO', 'name': 'Plano de Saúde', 'description': 'Mensalidade do plano'},
            {'code': 'FARMACIA', 'name': 'Farmácia', 'description': 'Remédios e produtos'},
            {'code': 'MEDICO', 'name': 'Consultas Médicas', 'description': 'Consultas e exames'},
            {'code': 'ACADEMIA', 'name': 'Academia', 'description': 'Mensalidade da academia'},
            # Educação
            {'code': 'CURSO', 'name': 'Cursos', 'description': 'Cursos e treinamentos'},
            {'code': 'LIVRO', 'name': 'Livros', 'description': 'Livros e materiais'},
            {'code': 'ESCOLA', 'name': 'Escola/Faculdade', 'description': 'Mensalidade escolar'},
            # Lazer
            {'code': 'CINEMA', 'name': 'Cinema', 'description': 'Ingressos de cinema'},
            {'code': 'SHOW', 'name': 'Shows', 'description': 'Ingressos de shows'},
            {'code': 'VIAGEM', 'name': 'Viagens', 'description': 'Passagens e hospedagem'},
            {'code': 'HOBBIES', 'name': 'Hobbies', 'description': 'Passatempos'},
            # Outros
            {'code': 'ROUPA', 'name': 'Roupas', 'description': 'Vestuário e calçados'},
            {'code': 'PRESENT', 'name': 'Presentes', 'description': 'Presentes para outros'},
            {'code': 'DOACAO', 'name': 'Doações', 'description': 'Doações para caridade'},
            {'code': 'EMPREST', 'name': 'Empréstimos', 'description': 'Pagamento de empréstimos'},
            {'code': 'TRANSF', 'name': 'Transferências', 'description': 'Transferência entre contas'},
            {'code': 'OUTROS', 'name': 'Outros', 'description': 'Outras despesas'},
        ]
