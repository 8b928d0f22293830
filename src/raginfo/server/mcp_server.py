"""FastMCP server exposing the knowledge base as tools."""

from mcp.server.fastmcp import FastMCP

from raginfo.session import Session


def create_mcp_server(session: Session) -> FastMCP:
    """Create an MCP server over a loaded session.

    Args:
        session: Session whose documents are served

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(
        name="raginfo",
    )

    @mcp.tool()
    def ls() -> str:
        """List documents in the knowledge base.

        Returns:
            One line per document: id, chunk count and name
        """
        files = session.state.files
        if not files:
            return "No documents in the knowledge base"

        return "\n".join(
            f"{doc.id:<60} {len(doc.chunks):>5} chunks  {doc.name}" for doc in files
        )

    @mcp.tool()
    def read(document_id: str) -> str:
        """Read a document's chunks.

        Args:
            document_id: Document id (as shown in ls output)

        Returns:
            The document's chunks separated by --- lines
        """
        doc = session.find_document(document_id)
        if doc is None:
            return f"Error: Document not found: {document_id}"
        return "\n---\n".join(doc.chunks)

    @mcp.tool()
    def ask(question: str) -> str:
        """Answer a question using every document as context.

        The exchange is recorded in the chat history.

        Args:
            question: Natural language question

        Returns:
            The generated answer
        """
        return session.ask(question).ai_response

    return mcp
