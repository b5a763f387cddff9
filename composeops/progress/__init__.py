"""Progress events and the writers that render them."""