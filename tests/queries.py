"""GraphQL documents shaped like the ones real clients send."""

ISSUE_QUERY = """
query($owner: String!, $repo: String!, $number: Int!) {
    repository(owner: $owner, name: $repo) {
        issue(number: $number) { id number title }
    }
}
"""

PROJECT_INFO_QUERY = """
query($owner: String!, $projectNumber: Int!) {
    user(login: $owner) { projectV2(number: $projectNumber) { id title } }
}
"""

PROJECT_FIELDS_QUERY = """
query($owner: String!, $projectNumber: Int!) {
    user(login: $owner) {
        projectV2(number: $projectNumber) {
            id
            field(name: "Status") {
                ... on ProjectV2SingleSelectField { id options { id name } }
            }
        }
    }
}
"""

PROJECT_ITEMS_QUERY = """
query($projectId: ID!) {
    node(id: $projectId) {
        ... on ProjectV2 {
            items(first: 100) {
                nodes {
                    id
                    fieldValueByName(name: "Status") {
                        ... on ProjectV2ItemFieldSingleSelectValue { name }
                    }
                    content { ... on Issue { number title } }
                }
            }
        }
    }
}
"""

ADD_ITEM_MUTATION = """
mutation($input: AddProjectV2ItemByIdInput!) {
    addProjectV2ItemById(input: $input) { item { id } }
}
"""

UPDATE_ITEM_MUTATION = """
mutation($projectId: ID!, $itemId: ID!, $fieldId: ID!, $optionId: String!) {
    updateProjectV2ItemFieldValue(
        input: {
            projectId: $projectId
            itemId: $itemId
            fieldId: $fieldId
            value: { singleSelectOptionId: $optionId }
        }
    ) {
        projectV2Item { id }
    }
}
"""
