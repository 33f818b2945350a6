"""Static documentation served as MCP resources and prompt text builders."""

from typing import List, Optional

API_OVERVIEW = """# Tana Input API

The Tana Input API is write-only: it creates nodes and renames existing ones.
Nothing can be read back apart from the ids Tana returns for created nodes.

## Endpoint
POST https://europe-west1-tagr-prod.cloudfunctions.net/addToNodeV2
Headers:
  Authorization: Bearer <API token>
  Content-Type: application/json

## Creating nodes
Body: {"targetNodeId": "<optional parent id>", "nodes": [<node>, ...]}
- Omitting targetNodeId adds the nodes to the Library.
- Use "INBOX" to add to the Inbox and "SCHEMA" to add schema items.
- At most 100 top-level nodes per request.

## Renaming a node
Body: {"targetNodeId": "<node id>", "setName": "<new name>"}

## Responses
Created nodes come back as {"children": [{"nodeId": ..., "name": ..., "children": [...]}]}.
A rename may or may not echo the node back.

## Limits
- One request per second per token.
- Payloads are limited to 5000 characters.
"""

NODE_TYPES = """# Tana node types

All nodes except references and fields accept optional "name",
"description", "supertags" and "children".

## plain
{"name": "My node"}  (dataType "plain" is optional)

## reference
{"dataType": "reference", "id": "<node id>"}
A reference cannot have a name, description or children.

## date
{"dataType": "date", "name": "2024-01-15"}
The name is an ISO 8601 date or date-time.

## url
{"dataType": "url", "name": "https://example.com"}

## boolean (checkbox)
{"dataType": "boolean", "name": "Task", "value": true}

## file
{"dataType": "file", "file": "<base64 data>", "filename": "doc.pdf", "contentType": "application/pdf"}

## field
{"type": "field", "attributeId": "<field id>", "children": [<node>, ...]}
Field nodes attach values to a field on their parent node.

## Supertags
"supertags": [{"id": "<supertag id>", "fields": {"<field id>": "value"}}]

## Schema items
- A supertag is a node tagged with SYS_T01 created under SCHEMA.
- A field definition is a node tagged with SYS_T02 created under SCHEMA.
"""

USAGE_EXAMPLES = """# Usage patterns

## Quick capture
create_plain_node(name="Call the dentist", targetNodeId="INBOX")

## Task with a checkbox
create_checkbox_node(name="Write report", checked=false,
                     supertags=[{"id": "<task tag id>"}])

## Bookmark
create_url_node(url="https://tana.inc/docs/input-api",
                description="Input API documentation")

## Node with structure
create_node_structure(node={
  "name": "Project Apollo",
  "children": [
    {"dataType": "date", "name": "2024-06-01"},
    {"name": "Kickoff notes"},
    {"dataType": "boolean", "name": "Book venue", "value": false}
  ]
})

## Field values
create_field_node(targetNodeId="<node id>", attributeId="<field id>",
                  children=[{"name": "High"}])

## Defining schema
create_supertag(name="meeting", description="A scheduled meeting")
create_field(name="Attendees")

## Renaming
set_node_name(nodeId="<node id>", newName="Better title")
"""


def _bullets(value: Optional[str]) -> List[str]:
    """Split a comma separated prompt argument into items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _target_hint(target_node_id: Optional[str]) -> str:
    if target_node_id:
        return f"Create it under the node with id '{target_node_id}'."
    return "Create it in the Library (no targetNodeId)."


def build_task_prompt(
    title: Optional[str] = None,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
    priority: Optional[str] = None,
    tags: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    lines = ["Create a task in Tana."]
    if title:
        lines.append(f"Task: {title}")
    else:
        lines.append("Ask me for the task name if it is not clear from context.")
    if description:
        lines.append(f"Details: {description}")
    if due_date:
        lines.append(
            f"Due date: {due_date}. Add it as a date node child in ISO 8601 format."
        )
    if priority:
        lines.append(f"Priority: {priority}")
    for tag in _bullets(tags):
        lines.append(f"Apply the supertag '{tag}' if you know its id.")
    lines.append(
        "Use create_checkbox_node with checked=false for the task itself, "
        "or create_node_structure when adding children."
    )
    lines.append(_target_hint(target_node_id))
    return "\n".join(lines)


def build_project_prompt(
    name: Optional[str] = None,
    goal: Optional[str] = None,
    deadline: Optional[str] = None,
    tasks: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    lines = ["Set up a project in Tana as a single node structure."]
    lines.append(f"Project name: {name}" if name else "Propose a concise project name.")
    if goal:
        lines.append(f"Goal: {goal} (use it as the project description)")
    if deadline:
        lines.append(f"Deadline: {deadline} as a date node child")
    task_list = _bullets(tasks)
    if task_list:
        lines.append("Add these tasks as unchecked boolean children:")
        lines.extend(f"- {task}" for task in task_list)
    else:
        lines.append("Break the project into 3-7 unchecked boolean task children.")
    lines.append("Submit everything with one create_node_structure call.")
    lines.append(_target_hint(target_node_id))
    return "\n".join(lines)


def build_meeting_notes_prompt(
    title: Optional[str] = None,
    date: Optional[str] = None,
    attendees: Optional[str] = None,
    agenda: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    lines = ["Record meeting notes in Tana."]
    if title:
        lines.append(f"Meeting: {title}")
    if date:
        lines.append(f"Date: {date} (add as a date node child)")
    people = _bullets(attendees)
    if people:
        lines.append("Attendees, one plain child node each under an 'Attendees' node:")
        lines.extend(f"- {person}" for person in people)
    items = _bullets(agenda)
    if items:
        lines.append("Agenda items, each a plain child node under 'Agenda':")
        lines.extend(f"- {item}" for item in items)
    lines.append(
        "Add an 'Action items' node whose children are unchecked boolean nodes "
        "for every follow-up mentioned."
    )
    lines.append("Submit the whole meeting with one create_node_structure call.")
    lines.append(_target_hint(target_node_id))
    return "\n".join(lines)


def build_knowledge_entry_prompt(
    topic: Optional[str] = None,
    category: Optional[str] = None,
    content: Optional[str] = None,
    sources: Optional[str] = None,
    related_topics: Optional[str] = None,
    target_node_id: Optional[str] = None,
) -> str:
    lines = ["Create a knowledge base entry in Tana."]
    lines.append(f"Topic: {topic}" if topic else "Infer the topic from our conversation.")
    if category:
        lines.append(f"Category: {category}")
    if content:
        lines.append(f"Summarize this into short child nodes:\n{content}")
    urls = _bullets(sources)
    if urls:
        lines.append("Sources, each a url node child:")
        lines.extend(f"- {url}" for url in urls)
    related = _bullets(related_topics)
    if related:
        lines.append("Related topics, as plain child nodes:")
        lines.extend(f"- {topic_name}" for topic_name in related)
    lines.append("Use create_node_structure so the entry is created in one request.")
    lines.append(_target_hint(target_node_id))
    return "\n".join(lines)
