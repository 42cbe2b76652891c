"""
Visualization routes.

Endpoints of the dataspace visualization: the derived graph, node
selection with its detail panel, and the local editing layer (node drag
and manual connect), which is never written back to a connector.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.db.client import ConsoleSession, get_session
from app.schemas.graph import EdgeConnect, GraphEdge, GraphNode, NodeDetails, NodeMove, VisualizationResponse

router = APIRouter()


@router.get("", response_model=VisualizationResponse)
async def get_visualization(session: ConsoleSession = Depends(get_session)):
    """
    Render the graph of provider, consumer, assets, policies and contracts.

    Returns:
        VisualizationResponse: Nodes, edges, selected node details and legend.
    """

    return await session.visualization.render()


@router.post("/nodes/{node_id}/select", response_model=NodeDetails)
async def select_node(node_id: str, session: ConsoleSession = Depends(get_session)):
    """
    Select a node and return the content of its detail panel.

    Raises:
        HTTPException: 404 if the node is not part of the graph.
    """

    try:
        return await session.visualization.select_node(node_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/selection", status_code=204)
async def close_details(session: ConsoleSession = Depends(get_session)):
    session.visualization.close_details()


@router.post("/nodes/{node_id}/position", response_model=GraphNode)
async def move_node(node_id: str, data: NodeMove, session: ConsoleSession = Depends(get_session)):
    try:
        return await session.visualization.move_node(node_id, data.x, data.y)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/edges", response_model=GraphEdge, status_code=201)
async def connect_nodes(data: EdgeConnect, session: ConsoleSession = Depends(get_session)):
    """
    Connect two nodes manually.

    Raises:
        HTTPException: 404 if either node is not part of the graph.
    """

    try:
        return await session.visualization.connect(data.source, data.target)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
