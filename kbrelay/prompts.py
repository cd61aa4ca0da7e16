"""Fixed prompt template and user-facing messages."""

# $search_results$ and $query$ are filled in by the knowledge base service
RAG_PROMPT_TEMPLATE = (
    "Use the following context to answer the question:\n"
    "Context: $search_results$\n"
    "Question: $query$\n"
    "Answer:"
)

QUERY_REQUIRED = "Query is required"

MALFORMED_RESPONSE = "Malformed response from knowledge base: missing output text"
MALFORMED_CITATIONS = "Malformed response from knowledge base: citations must be a list of records"
