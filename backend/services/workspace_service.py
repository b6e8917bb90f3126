"""
Workspaces and the current-workspace selection
"""
import logging
from typing import List, Optional

from models.records import Workspace
from services.entity_service import EntityService
from utils.datetime_utils import utc_now
from utils.id_generator import generate_id, normalize_id

logger = logging.getLogger(__name__)

SEED_WORKSPACES = [
    {"id": "1", "name": "My Startup", "role": "Owner", "createdAt": "2023-01-01"},
    {"id": "2", "name": "Side Project", "role": "Admin", "createdAt": "2023-06-15"},
]

CURRENT_WORKSPACE_KEY = "current_workspace"


class WorkspaceService(EntityService[Workspace]):
    collection = "workspaces"
    model = Workspace
    seed = SEED_WORKSPACES
    id_type = "workspace"

    async def create(self, name: str) -> List[Workspace]:
        """Create a workspace owned by the current user"""
        workspace = Workspace(
            id=generate_id(self.id_type),
            name=name,
            role="Owner",
            created_at=utc_now().isoformat(),
        )
        return await self.add(workspace)

    async def switch(self, workspace_id) -> Workspace:
        """
        Persist the current workspace selection.

        Raises:
            KeyError: if no workspace has that id
        """
        workspace = await self.get(workspace_id)
        if workspace is None:
            raise KeyError(f"Unknown workspace: {workspace_id}")
        await self.store.set(CURRENT_WORKSPACE_KEY, normalize_id(workspace_id))
        logger.info(f"Switched to workspace {workspace.id} ({workspace.name})")
        return workspace

    async def current(self) -> Optional[Workspace]:
        """Selected workspace, defaulting to the first one"""
        workspaces = await self.list()
        if not workspaces:
            return None
        selected = await self.store.get(CURRENT_WORKSPACE_KEY, workspaces[0].id)
        return next((w for w in workspaces if w.id == selected), workspaces[0])
