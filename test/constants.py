OWNER_NAME = 'alice'
OWNER_ID = 'U_OWNER'
ADMIN_NAME = 'admin'
ADMIN_ID = 'U_ADMIN'
GUEST_NAME = 'bob'
GUEST_ID = 'U_GUEST'
OTHER_NAME = 'carol'
OTHER_ID = 'U_OTHER'

OWNED_SPACE = '-1st floor 1'
FREE_SPACE = '-1st floor 2'
OTHER_FREE_SPACE = '-1st floor 3'
UPPER_SPACE = '1st floor 10'
